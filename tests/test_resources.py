import pytest

from pytorchdemo.inference import ResourceBundle, ResourceMissing
from pytorchdemo.inference.resources import ResourceId


def test_path_resolves_name_and_type(tmp_path):
    (tmp_path / "Labels.txt").write_text("a\n")
    bundle = ResourceBundle(tmp_path)
    assert bundle.path("Labels", "txt") == tmp_path / "Labels.txt"
    assert bundle.path("Labels", "csv") is None


def test_require_raises_for_missing(tmp_path):
    with pytest.raises(ResourceMissing) as info:
        ResourceBundle(tmp_path).require("ResNet18", "pt")
    assert "ResNet18.pt" in str(info.value)


def test_directories_are_not_resources(tmp_path):
    (tmp_path / "ResNet18.pt").mkdir()
    assert ResourceBundle(tmp_path).path("ResNet18", "pt") is None


def test_labels_handle_newline_conventions(tmp_path):
    (tmp_path / "Labels.txt").write_bytes(b"tench\r\ngoldfish\r\ngreat white shark\r\n")
    labels = ResourceBundle(tmp_path).read_labels("Labels", "txt")
    assert labels == ("tench", "goldfish", "great white shark")


def test_labels_are_kept_verbatim(tmp_path):
    (tmp_path / "topics.txt").write_text(" leading\ntrailing \n\nlast", encoding="utf-8")
    labels = ResourceBundle(tmp_path).read_labels("topics", "txt")
    assert labels == (" leading", "trailing ", "", "last")


def test_undecodable_labels_raise(tmp_path):
    (tmp_path / "Labels.txt").write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(ResourceMissing):
        ResourceBundle(tmp_path).read_labels("Labels", "txt")


def test_resource_id_filename():
    assert ResourceId("model-reddit16", "pt").filename == "model-reddit16.pt"
    assert ResourceId("LICENSE", "").filename == "LICENSE"
