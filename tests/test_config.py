import pytest
from ruamel.yaml import YAML

from admonfence.config.loader import ConfigError, load_type_map
from admonfence.conversion.pipeline import transform
from admonfence.core.models import DEFAULT_TYPE_MAPPING
from admonfence.validator.validator import FenceValidator


def write_yaml(path, data):
    yaml = YAML()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)
    return path


def test_builtin_table_without_file():
    type_map = load_type_map()
    assert type_map.mapping == DEFAULT_TYPE_MAPPING
    assert type_map.default == "note"
    assert type_map.resolve("bug") == ("danger", True)


def test_file_extends_builtin_table(tmp_path):
    path = write_yaml(tmp_path / "map.yaml", {"default": "info", "types": {"TODO": "warning", "bug": "warning"}})
    type_map = load_type_map(path)
    assert type_map.resolve("todo") == ("warning", True)
    assert type_map.resolve("bug") == ("warning", True)
    assert type_map.resolve("tip") == ("tip", True)
    assert type_map.default == "info"


def test_replace_drops_builtin_table(tmp_path):
    path = write_yaml(tmp_path / "map.yaml", {"replace": True, "types": {"todo": "warning"}})
    type_map = load_type_map(path)
    assert len(type_map) == 1
    assert type_map.resolve("bug") == ("note", False)


def test_cli_default_wins_over_file(tmp_path):
    path = write_yaml(tmp_path / "map.yaml", {"default": "info"})
    assert load_type_map(path, default_type="tip").default == "tip"


def test_empty_file_keeps_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_type_map(path).mapping == DEFAULT_TYPE_MAPPING


@pytest.mark.parametrize("content, message", [
    ("- just\n- a list\n", "top level must be a mapping"),
    ("types: [a, b]\n", "'types' must be a mapping"),
    ("types:\n  bug: ''\n", "must be a non-empty string"),
    ("colour: blue\n", "unknown keys"),
    ("types: {bug: danger\n", "Invalid YAML"),
])
def test_invalid_files_raise_config_error(tmp_path, content, message):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_type_map(path)


def test_missing_file_raises_config_error(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read"):
        load_type_map(tmp_path / "absent.yaml")


def test_blank_default_type_is_rejected():
    with pytest.raises(ConfigError):
        load_type_map(default_type="  ")


@pytest.mark.parametrize("content", [
    "# only a comment\n",
    "---\n",
])
def test_comment_only_file_keeps_defaults(tmp_path, content):
    path = tmp_path / "comments.yaml"
    path.write_text(content, encoding="utf-8")
    type_map = load_type_map(path)
    assert type_map.mapping == DEFAULT_TYPE_MAPPING
    assert type_map.default == "note"


@pytest.mark.parametrize("replace", ["no", '"false"', "'yes'", "0"])
def test_non_boolean_replace_is_rejected(tmp_path, replace):
    path = tmp_path / "map.yaml"
    path.write_text(f"replace: {replace}\ntypes:\n  todo: warning\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="'replace' must be true or false"):
        load_type_map(path)


def test_replace_false_keeps_builtin_table(tmp_path):
    path = write_yaml(tmp_path / "map.yaml", {"replace": False, "types": {"todo": "warning"}})
    type_map = load_type_map(path)
    assert type_map.resolve("bug") == ("danger", True)
    assert type_map.resolve("todo") == ("warning", True)


@pytest.mark.parametrize("content", [
    "types:\n  bug: custom.danger\n",
    "types:\n  bug: very bad\n",
    "default: 'note[x]'\n",
])
def test_container_names_must_be_fence_tokens(tmp_path, content):
    path = tmp_path / "map.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError, match="only letters, digits"):
        load_type_map(path)


def test_cli_default_type_must_be_fence_token():
    with pytest.raises(ConfigError, match="only letters, digits"):
        load_type_map(default_type="my type")


def test_accepted_names_produce_writable_output(tmp_path):
    path = write_yaml(tmp_path / "map.yaml", {"default": "my_note", "types": {"bug": "custom-danger"}})
    type_map = load_type_map(path)
    converted = transform("!!! bug\n    x\n!!! odd\n    y\n", type_map)
    assert converted.startswith(":::custom-danger[Bug]")
    assert FenceValidator().validate(converted) == (True, "")


def test_case_colliding_keys_are_rejected(tmp_path):
    path = tmp_path / "map.yaml"
    path.write_text("types:\n  Bug: danger\n  bug: warning\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="collide"):
        load_type_map(path)
