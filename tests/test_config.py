import pytest
import yaml

from pytorchdemo.utils.config import (
    Config,
    get_config_value,
    get_default_config,
    load_config,
    load_predictor_config,
    merge_configs,
    save_config,
)


def test_default_config_names_bundled_resources():
    cfg = get_default_config()
    assert cfg.image.model.name == "ResNet18"
    assert cfg.image.labels.name == "Labels"
    assert cfg.text.model.name == "model-reddit16"
    assert cfg.text.labels.name == "reddit_topics"
    assert cfg.get("image.result_count") == 3


def test_user_config_is_merged_over_defaults(tmp_path):
    path = tmp_path / "user.yaml"
    save_config({"resources": {"directory": "/opt/models"}, "image": {"result_count": 5}}, path)

    cfg = load_predictor_config(path)

    assert cfg.get("resources.directory") == "/opt/models"
    assert cfg.get("image.result_count") == 5
    # Untouched defaults survive
    assert cfg.get("image.model.name") == "ResNet18"


def test_required_keys_are_validated(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text(yaml.safe_dump({"text": {"labels": {"name": None}}}))
    with pytest.raises(ValueError, match="text.labels.name"):
        load_predictor_config(path)


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_predictor_config(tmp_path / "nope.yaml")


def test_empty_file_loads_as_empty_dict(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == {}


def test_merge_is_recursive_and_does_not_mutate():
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    merged = merge_configs(base, {"a": {"c": 20}})
    assert merged == {"a": {"b": 1, "c": 20}, "d": 3}
    assert base == {"a": {"b": 1, "c": 2}, "d": 3}


def test_get_config_value_default():
    assert get_config_value({"a": {"b": 1}}, "a.x", default="fallback") == "fallback"


def test_config_wrapper_access():
    cfg = Config.from_dict({"logging": {"level": "DEBUG"}})
    assert cfg.logging.level == "DEBUG"
    assert cfg.missing is None
