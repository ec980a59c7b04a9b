import json
from pathlib import Path

from click.testing import CliRunner

from poststore import __version__
from poststore.cli import cli
from poststore.store import PostStore


def create_project(root: Path) -> Path:
    posts = root / "posts"
    posts.mkdir(parents=True)
    (posts / "pre-rendering.md").write_text(
        '---\ntitle: "Two Forms of Pre-rendering"\ndate: "2020-01-01"\n---\n\nNext.js has *two* forms.\n',
        encoding="utf-8",
    )
    (posts / "ssg-ssr.md").write_text(
        '---\ntitle: "Static Generation"\ndate: "2020-01-02"\nauthor: Rama\n---\n\n# Static\n',
        encoding="utf-8",
    )
    return root


class FakePrompt:
    def __init__(self, answer):
        self.answer = answer

    def ask(self):
        return self.answer


def fake_text(answers, seen=None):
    queue = list(answers)

    def text(message, default="", validate=None, style=None):
        if seen is not None:
            seen.append((message, default))
        answer = queue.pop(0)
        if answer is not None and validate is not None:
            assert validate(answer) is True
        return FakePrompt(answer)

    return text


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_ids(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    runner = CliRunner()
    result = runner.invoke(cli, ["ids"], catch_exceptions=False)
    assert result.exit_code == 0
    assert result.output.splitlines() == ["pre-rendering", "ssg-ssr"]

    result = runner.invoke(cli, ["ids", "--json"], catch_exceptions=False)
    params = json.loads(result.output)
    assert {"params": {"id": "ssg-ssr"}} in params
    assert len(params) == 2


def test_list(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    runner = CliRunner()
    result = runner.invoke(cli, ["list"], catch_exceptions=False)
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "2020-01-02  ssg-ssr  Static Generation",
        "2020-01-01  pre-rendering  Two Forms of Pre-rendering",
    ]

    result = runner.invoke(cli, ["list", "--json", "--limit", "1"], catch_exceptions=False)
    assert json.loads(result.output) == [
        {"id": "ssg-ssr", "title": "Static Generation", "date": "2020-01-02", "author": "Rama"}
    ]


def test_show(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    runner = CliRunner()
    result = runner.invoke(cli, ["show", "pre-rendering"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "<em>two</em>" in result.output

    result = runner.invoke(cli, ["show", "ssg-ssr", "--json"], catch_exceptions=False)
    data = json.loads(result.output)
    assert data["title"] == "Static Generation"
    assert data["author"] == "Rama"
    assert '<h1 id="static">Static</h1>' in data["content_html"]


def test_show_unknown_post(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    result = CliRunner().invoke(cli, ["show", "nope"])
    assert result.exit_code == 1
    assert "Post not found: nope" in result.output


def test_storage_errors_exit_with_status_one(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["ids"])
    assert result.exit_code == 1
    assert "Content error" in result.output

    create_project(tmp_path)
    (tmp_path / "posts" / "broken.md").write_text("# no front-matter\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code == 1
    assert "broken.md" in result.output
    assert "missing front-matter block" in result.output


def test_new_creates_post(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    seen = []
    monkeypatch.setattr(
        "poststore.cli.questionary.text",
        fake_text(["Hello: World", "hello-world", "2024-03-05"], seen),
    )
    result = CliRunner().invoke(cli, ["new"], catch_exceptions=False)
    assert result.exit_code == 0
    created = tmp_path / "posts" / "hello-world.md"
    assert created.exists()
    assert "Created posts/hello-world.md" in result.output
    assert seen[1][1] == "hello-world"

    result = CliRunner().invoke(cli, ["show", "hello-world", "--json"], catch_exceptions=False)
    data = json.loads(result.output)
    assert data["title"] == "Hello: World"
    assert data["date"] == "2024-03-05"


def test_new_refuses_duplicate_id(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    monkeypatch.setattr(
        "poststore.cli.questionary.text",
        fake_text(["Anything", "ssg-ssr", "2024-03-05"]),
    )
    result = CliRunner().invoke(cli, ["new"])
    assert result.exit_code != 0
    assert "already exists" in result.output


def test_new_aborts_when_prompt_cancelled(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("poststore.cli.questionary.text", fake_text([None]))
    result = CliRunner().invoke(cli, ["new"])
    assert result.exit_code != 0
    assert not (tmp_path / "posts").exists()


def test_module_main_entrypoint():
    from poststore.__main__ import main

    assert callable(main)


def test_new_keeps_astral_characters_in_title(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    monkeypatch.setattr(
        "poststore.cli.questionary.text",
        fake_text(["Hi \U0001F600", "hi", "2024-03-05"]),
    )
    result = CliRunner().invoke(cli, ["new"], catch_exceptions=False)
    assert result.exit_code == 0

    store = PostStore(tmp_path / "posts")
    assert store.get_post_data("hi").metadata.title == "Hi \U0001F600"
    assert store.get_post_data("hi").metadata.date == "2024-03-05"

    result = CliRunner().invoke(cli, ["list"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "hi  Hi \U0001F600" in result.output


def test_list_rejects_negative_limit(monkeypatch, tmp_path):
    monkeypatch.chdir(create_project(tmp_path))
    runner = CliRunner()
    result = runner.invoke(cli, ["list", "--limit", "-1"])
    assert result.exit_code == 2
    assert "--limit" in result.output

    result = runner.invoke(cli, ["list", "--limit", "0"], catch_exceptions=False)
    assert result.exit_code == 0
    assert result.output == ""


def test_new_reports_invalid_config(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "poststore.yaml").write_text("content_dir: [oops\n", encoding="utf-8")
    monkeypatch.setattr("poststore.cli.questionary.text", fake_text([]))
    result = CliRunner().invoke(cli, ["new"])
    assert result.exit_code == 1
    assert "Content error" in result.output
    assert "poststore.yaml" in result.output
    assert not (tmp_path / "posts").exists()
