import json

from hayagriva.main import main

PROMPT = "Build a dashboard app with dark mode and authentication"
TIMESTAMP = "2024-01-01T12:00:00+00:00"


def test_generate_prints_artifact_path(tmp_path, capsys):
    code = main(["generate", "--prompt", PROMPT, "--project-dir", str(tmp_path), "--timestamp", TIMESTAMP])
    assert code == 0
    out = capsys.readouterr().out
    assert "dashboard-app.bundle.jsx" in out
    assert (tmp_path / "generated" / "dashboard-app.bundle.jsx").exists()


def test_generate_flags(tmp_path, capsys):
    code = main(
        [
            "generate",
            "--prompt", "a blog",
            "--project-dir", str(tmp_path),
            "--out-dir", "build",
            "--extension", "tsx",
            "--css-framework", "bootstrap",
            "--no-responsive",
        ]
    )
    assert code == 0
    text = (tmp_path / "build" / "hayagriva-app.bundle.tsx").read_text(encoding="utf-8")
    assert "import 'bootstrap/dist/css/bootstrap.min.css';" in text
    assert "@media" not in text


def test_generate_rejects_invalid_default_name(tmp_path):
    code = main(["generate", "--prompt", "x", "--project-dir", str(tmp_path), "--default-name", "9lives"])
    assert code == 2


def test_history_lists_generations(tmp_path, capsys):
    main(["history", "--project-dir", str(tmp_path)])
    assert "No generations yet." in capsys.readouterr().out

    main(["generate", "--prompt", PROMPT, "--project-dir", str(tmp_path), "--timestamp", TIMESTAMP])
    capsys.readouterr()
    assert main(["history", "--project-dir", str(tmp_path)]) == 0
    out = capsys.readouterr().out
    assert "DashboardApp" in out
    assert "dashboard" in out


def test_history_delete(tmp_path, capsys):
    main(["generate", "--prompt", PROMPT, "--project-dir", str(tmp_path)])
    history = json.loads((tmp_path / "project_state" / "history.json").read_text(encoding="utf-8"))
    record_id = history[0]["id"]

    assert main(["history", "--project-dir", str(tmp_path), "--delete", record_id]) == 0
    assert main(["history", "--project-dir", str(tmp_path), "--delete", record_id]) == 1


def _write_transcript(tmp_path, transcript):
    path = tmp_path / "chat.json"
    path.write_text(json.dumps(transcript), encoding="utf-8")
    return path


def test_widget_command(tmp_path, capsys, transcript):
    path = _write_transcript(tmp_path, transcript)
    code = main(["widget", "--transcript", str(path), "--project-dir", str(tmp_path), "--name", "Vidya"])
    assert code == 0
    assert "vidya-chatbot.js" in capsys.readouterr().out
    assert (tmp_path / "generated" / "vidya-chatbot.js").exists()


def test_widget_ask_previews_reply(tmp_path, capsys, transcript):
    path = _write_transcript(tmp_path, transcript)
    code = main(["widget", "--transcript", str(path), "--project-dir", str(tmp_path), "--ask", "what is yoga"])
    assert code == 0
    assert "Yoga is a practice" in capsys.readouterr().out


def test_widget_rejects_bad_transcript(tmp_path):
    path = _write_transcript(tmp_path, {"role": "user", "content": "not a list"})
    assert main(["widget", "--transcript", str(path), "--project-dir", str(tmp_path)]) == 2
    missing = tmp_path / "nope.json"
    assert main(["widget", "--transcript", str(missing), "--project-dir", str(tmp_path)]) == 2
