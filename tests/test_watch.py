from dotcursor.model import AnalyzerConfig
from dotcursor.watch import build_watch_signature, watch


def test_signature_changes_with_visible_files(workspace):
	before = build_watch_signature(str(workspace))
	assert build_watch_signature(str(workspace)) == before
	(workspace / "new.ts").write_text("function added() {}")
	assert build_watch_signature(str(workspace)) != before


def test_signature_ignores_skipped_entries(workspace):
	config = AnalyzerConfig(gitignore_patterns=["*.log"])
	(workspace / "node_modules").mkdir()
	before = build_watch_signature(str(workspace), config)
	(workspace / "run.log").write_text("x")
	(workspace / ".cursor.directory_structure.md").write_text("x")
	(workspace / "node_modules" / "dep.js").write_text("x")
	assert build_watch_signature(str(workspace), config) == before


def test_signature_tracks_gitignore_edits(workspace):
	before = build_watch_signature(str(workspace))
	(workspace / ".gitignore").write_text("*.css\n")
	assert build_watch_signature(str(workspace)) != before


def test_watch_reruns_once_per_change(workspace):
	calls = []
	sleeps = []

	def fake_sleep(seconds):
		sleeps.append(seconds)
		if len(sleeps) == 1:
			(workspace / "added.py").write_text("def added():\n    pass\n")

	runs = watch(str(workspace), lambda: calls.append(1), interval=0.5, max_cycles=3, sleep=fake_sleep)

	assert runs == 1
	assert len(calls) == 1
	assert sleeps == [0.5, 0.5, 0.5]


def test_watch_keeps_going_after_failed_run(workspace):
	counter = {"n": 0}

	def fake_sleep(_):
		counter["n"] += 1
		(workspace / f"file{counter['n']}.ts").write_text("")

	def failing():
		raise FileNotFoundError("gone")

	assert watch(str(workspace), failing, max_cycles=2, sleep=fake_sleep) == 2


def test_watch_stops_on_keyboard_interrupt(workspace):
	def interrupt(_):
		raise KeyboardInterrupt

	assert watch(str(workspace), lambda: None, sleep=interrupt) == 0


def test_latin1_gitignore_is_tolerated(workspace):
	(workspace / ".gitignore").write_bytes(b"caf\xe9/\n")
	calls = []
	assert watch(str(workspace), lambda: calls.append(1), max_cycles=2, sleep=lambda _: None) == 0
	assert calls == []


def test_signature_ignores_excluded_paths(workspace):
	config = AnalyzerConfig(exclude_paths=["report.md"])
	before = build_watch_signature(str(workspace), config)
	(workspace / "report.md").write_text("x")
	assert build_watch_signature(str(workspace), config) == before
