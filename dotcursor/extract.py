from __future__ import annotations

import re
from typing import Dict, List, Tuple

# Each rule is (kind, regex); the regex captures the symbol name in a group
# called "name". Rules of one language are tried as a single alternation so
# that symbols come out in document order.
_ECMASCRIPT_RULES: List[Tuple[str, str]] = [
	("function", r"function\s+(?P<name>\w+)"),
	("arrow", r"const\s+(?P<name>\w+)\s*=\s*(?:async\s*)?\([^)]*\)\s*=>"),
	("class", r"class\s+(?P<name>\w+)"),
]

_PYTHON_RULES: List[Tuple[str, str]] = [
	("function", r"def\s+(?P<name>\w+)\s*\([^)]*\):"),
	("class", r"class\s+(?P<name>\w+):"),
]

LANGUAGE_RULES: Dict[str, List[Tuple[str, str]]] = {
	"TypeScript": _ECMASCRIPT_RULES,
	"JavaScript": _ECMASCRIPT_RULES,
	"Python": _PYTHON_RULES,
}


def _combine(rules: List[Tuple[str, str]]) -> re.Pattern:
	alternatives = []
	for kind, regex in rules:
		alternatives.append(regex.replace("(?P<name>", f"(?P<{kind}>"))
	return re.compile("|".join(alternatives), re.ASCII)


_COMPILED: Dict[str, re.Pattern] = {
	file_type: _combine(rules) for file_type, rules in LANGUAGE_RULES.items()
}


def supported_file_types() -> List[str]:
	return list(LANGUAGE_RULES)


def extract_functions(content: str, file_type: str) -> List[str]:
	"""Return function and class names found in ``content``, in document order.

	This is a lexical scan, not a parse: names inside comments or strings are
	picked up too, and nothing is deduplicated. Unsupported file types yield
	an empty list.
	"""
	regex = _COMPILED.get(file_type)
	if regex is None:
		return []
	functions: List[str] = []
	for match in regex.finditer(content):
		name = match.group(match.lastgroup) if match.lastgroup else None
		if name:
			functions.append(name)
	return functions
