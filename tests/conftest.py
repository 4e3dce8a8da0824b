from pathlib import Path
from typing import Callable, Optional, Sequence

import pytest

from pytorchdemo.inference import InferenceEngine, OutputBuffer, TensorType

IMAGE_LABELS = ["cat", "dog", "bird"]
TEXT_LABELS = ["sports", "politics", "science", "gaming"]


class FakeEngine(InferenceEngine):
    """Scripted engine: returns fixed scores, optionally rejects or runs a hook."""

    def __init__(
        self,
        scores: Optional[Sequence[float]] = None,
        accept: bool = True,
        load_ok: bool = True,
        produce_output: bool = True,
        on_predict: Optional[Callable[[], None]] = None,
    ):
        self.scores = list(scores) if scores is not None else [0.1, 0.9, 0.5]
        self.accept = accept
        self.load_ok = load_ok
        self.produce_output = produce_output
        self.on_predict = on_predict
        self.loaded_path = None
        self.calls = []
        self.data = None

    def load_model(self, path):
        self.loaded_path = Path(path)
        return self.load_ok

    def predict(self, buffer, tensor_sizes, tensor_type=TensorType.FLOAT):
        self.calls.append((buffer, tuple(tensor_sizes), tensor_type))
        self.data = None
        if self.on_predict is not None:
            self.on_predict()
        if not self.accept:
            return False
        if self.produce_output:
            self.data = OutputBuffer(self.scores)
        return True

    def predict_text(self, text):
        self.calls.append(text)
        if self.on_predict is not None:
            self.on_predict()
        if not self.accept:
            return None
        return OutputBuffer(self.scores)


def write_bundle(directory: Path, model: str, labels_file: str, labels: Sequence[str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / model).write_bytes(b"not a real model")
    (directory / labels_file).write_text("\n".join(labels) + "\n", encoding="utf-8")
    return directory


@pytest.fixture
def image_bundle(tmp_path):
    return write_bundle(tmp_path / "bundle", "ResNet18.pt", "Labels.txt", IMAGE_LABELS)


@pytest.fixture
def text_bundle(tmp_path):
    return write_bundle(tmp_path / "bundle", "model-reddit16.pt", "reddit_topics.txt", TEXT_LABELS)


class Recorder:
    """Completion handler that remembers every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)


@pytest.fixture
def recorder():
    return Recorder()
