"""Tests for loading the static playground content."""

import json

import pytest

from gitplayground.config import PlaygroundConfig
from gitplayground.content import (
    ContentError,
    load_content,
    load_hint_book,
    load_scenarios,
    load_walkthrough,
)
from gitplayground.engine import ScenarioEngine


@pytest.fixture(scope="module")
def content():
    return load_content()


def test_packaged_content_loads(content):
    ids = [scenario.id for scenario in content.scenarios]

    assert len(ids) == len(set(ids))
    assert "first_commit" in ids
    assert any(scenario.sandbox for scenario in content.scenarios)
    assert content.help_sections
    assert content.hint_book.explain("git status")


def test_walkthrough_covers_known_scenarios(content):
    ids = {scenario.id for scenario in content.scenarios}

    assert set(content.walkthrough) <= ids


@pytest.mark.parametrize(
    "scenario_id",
    [
        "first_commit",
        "feature_branch",
        "merge_conflict",
        "stash_work",
        "release_tag",
        "rebase_practice",
        "undo_commit",
    ],
)
def test_packaged_solution_completes_scenario(content, scenario_id):
    engine = ScenarioEngine(content.scenarios, content.walkthrough, content.hint_book, PlaygroundConfig())
    assert engine.select_scenario(scenario_id)

    for command in engine.scenario.solution:
        outcome = engine.handle_command(command, from_script=True)
        assert outcome.accepted, f"{command} was rejected: {outcome.output}"

    assert engine.session.all_complete
    assert engine.summary is not None


def test_packaged_walkthrough_follows_solution(content):
    engine = ScenarioEngine(content.scenarios, content.walkthrough, content.hint_book, PlaygroundConfig())
    engine.select_scenario("feature_branch")
    engine.set_guided_mode(True)

    for command in engine.scenario.solution:
        engine.handle_command(command, from_script=True)

    assert engine.session.walk_index == len(engine.steps)
    assert engine.current_step is None


def test_missing_fields_get_defaults(tmp_path):
    (tmp_path / "scenarios.json").write_text(
        json.dumps({"scenarios": [{"id": "bare", "title": "Bare", "initialRepo": {"currentBranch": "dev"}}]})
    )

    scenario = load_scenarios(str(tmp_path))[0]
    repo = scenario.initial_repo.to_repository(1_000)

    assert scenario.objectives == []
    assert scenario.sandbox is False
    assert repo.branches == ["main", "dev"]
    assert repo.current_branch == "dev"
    assert repo.files == {}
    assert repo.commits == []


def test_seed_defaults_are_filled(tmp_path):
    (tmp_path / "scenarios.json").write_text(
        json.dumps(
            {
                "scenarios": [
                    {
                        "id": "seeded",
                        "title": "Seeded",
                        "initialRepo": {
                            "branches": [],
                            "staged": ["a.txt", "a.txt"],
                            "commits": [{"id": "c1", "msg": "first"}],
                            "tags": [{"message": "unnamed"}],
                            "stash": [{"files": {"a.txt": "x"}}],
                        },
                    }
                ]
            }
        )
    )

    repo = load_scenarios(str(tmp_path))[0].initial_repo.to_repository(42)

    assert repo.branches == ["main"]
    assert repo.staged == ["a.txt"]
    assert repo.commits[0].timestamp == 42
    assert repo.commits[0].branch == "main"
    assert repo.tags[0].name == "v1.0"
    assert repo.tags[0].created_at == 42
    assert repo.stash[0].id == "stash@{0}"
    assert repo.stash[0].branch == "main"


def test_missing_files_in_content_dir(tmp_path):
    assert load_scenarios(str(tmp_path)) == []
    assert load_walkthrough(str(tmp_path)) == {}
    assert load_hint_book(str(tmp_path)).smart_hints == {}

    with pytest.raises(ContentError):
        ScenarioEngine(load_scenarios(str(tmp_path)))


def test_invalid_json_raises(tmp_path):
    (tmp_path / "scenarios.json").write_text("{not json")

    with pytest.raises(ContentError, match="not valid JSON"):
        load_scenarios(str(tmp_path))


def test_invalid_scenario_raises(tmp_path):
    (tmp_path / "scenarios.json").write_text(json.dumps({"scenarios": [{"title": "No id"}]}))

    with pytest.raises(ContentError, match="failed validation"):
        load_scenarios(str(tmp_path))


@pytest.mark.parametrize("payload", [[{"id": "a", "title": "A"}], "scenarios", {"scenarios": {"id": "a"}}])
def test_wrong_file_shape_raises(tmp_path, payload):
    (tmp_path / "scenarios.json").write_text(json.dumps(payload))

    with pytest.raises(ContentError, match="scenarios.json failed validation"):
        load_scenarios(str(tmp_path))


def test_wrong_walkthrough_shape_raises(tmp_path):
    (tmp_path / "git_walkthrough.json").write_text(json.dumps([]))

    with pytest.raises(ContentError, match="git_walkthrough.json failed validation"):
        load_walkthrough(str(tmp_path))
