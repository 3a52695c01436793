from textwrap import dedent

import pytest

MAIN_TS = dedent(
	"""
	function hello() {
	  console.log("Hello");
	}
	const arrowFunc = () => {
	  return "arrow";
	};
	class TestClass {
	  method() {}
	}
	"""
)

SCRIPT_PY = dedent(
	"""
	def python_func():
	    pass
	class PythonClass:
	    pass
	"""
)


@pytest.fixture
def workspace(tmp_path):
	(tmp_path / "main.ts").write_text(MAIN_TS)
	(tmp_path / "script.py").write_text(SCRIPT_PY)
	(tmp_path / "style.css").write_text("body { color: red; }")
	return tmp_path
