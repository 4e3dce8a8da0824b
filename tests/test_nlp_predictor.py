import itertools

import pytest
import torch

from conftest import TEXT_LABELS, FakeEngine
from pytorchdemo.inference import (
    InvalidInputTensor,
    InvalidOutputTensor,
    NLPPredictor,
    PredictorState,
    ResourceMissing,
)
from pytorchdemo.inference import nlp_predictor
from pytorchdemo.utils.config import Config, get_default_config, merge_configs


def test_loads_reddit_bundle(text_bundle):
    engine = FakeEngine(scores=[0.1, 0.2, 0.3, 0.4])
    predictor = NLPPredictor(text_bundle, engine=engine)
    assert engine.loaded_path.name == "model-reddit16.pt"
    assert predictor.labels == tuple(TEXT_LABELS)


def test_forward_reports_results_and_time(text_bundle, recorder, monkeypatch):
    clock = itertools.chain([10.0, 10.25], itertools.repeat(11.0))
    monkeypatch.setattr(nlp_predictor.time, "perf_counter", lambda: next(clock))
    engine = FakeEngine(scores=[0.05, 0.6, 0.3, 0.05])
    predictor = NLPPredictor(text_bundle, engine=engine)

    outcome = predictor.forward("a new bill passed the senate", 2, recorder)

    results, elapsed, error = recorder.calls[0]
    assert error is None
    assert [r.label for r in results] == ["politics", "science"]
    assert elapsed == pytest.approx(250.0)
    assert outcome.inference_time_ms == pytest.approx(250.0)
    assert engine.calls == ["a new bill passed the senate"]


def test_rejected_text_reports_error(text_bundle, recorder):
    predictor = NLPPredictor(text_bundle, engine=FakeEngine(accept=False))

    outcome = predictor.forward("hello", 3, recorder)

    assert recorder.calls == [([], 0.0, outcome.error)]
    assert isinstance(outcome.error, InvalidInputTensor)
    assert predictor.state is PredictorState.IDLE


def test_output_length_is_checked_against_labels(text_bundle, recorder):
    predictor = NLPPredictor(text_bundle, engine=FakeEngine(scores=[0.5, 0.5]))

    predictor.forward("hello", 3, recorder)

    results, elapsed, error = recorder.calls[0]
    assert results == []
    assert elapsed == 0.0
    assert isinstance(error, InvalidOutputTensor)


def test_reentrant_forward_is_dropped(text_bundle, recorder):
    engine = FakeEngine(scores=[0.4, 0.3, 0.2, 0.1])
    predictor = NLPPredictor(text_bundle, engine=engine)
    inner = []
    engine.on_predict = lambda: inner.append(predictor.forward("again", 1, recorder))

    outcome = predictor.forward("first", 1, recorder)

    assert inner == [None]
    assert len(recorder.calls) == 1
    assert [r.label for r in outcome.results] == ["sports"]
    assert engine.calls == ["first"]


def test_works_without_a_handler(text_bundle):
    predictor = NLPPredictor(text_bundle, engine=FakeEngine(scores=[0.4, 0.3, 0.2, 0.1]))
    outcome = predictor.forward("score", 4)
    assert [r.label for r in outcome.results] == TEXT_LABELS


def test_missing_labels_raise(tmp_path):
    (tmp_path / "model-reddit16.pt").write_bytes(b"")
    with pytest.raises(ResourceMissing):
        NLPPredictor(tmp_path, engine=FakeEngine())


class ByteStats(torch.nn.Module):
    def forward(self, x: torch.Tensor) -> torch.Tensor:
        y = x.float()
        return torch.stack([y.sum(dim=1), y.mean(dim=1)], dim=1)


def test_unencodable_text_reaches_handler_as_input_error(tmp_path, recorder):
    torch.jit.script(ByteStats()).save(str(tmp_path / "model-reddit16.pt"))
    (tmp_path / "reddit_topics.txt").write_text("total\naverage\n")
    predictor = NLPPredictor(tmp_path, device="cpu")

    outcome = predictor.forward("caf\udce9", 2, recorder)

    assert recorder.calls == [([], 0.0, outcome.error)]
    assert isinstance(outcome.error, InvalidInputTensor)
    assert predictor.state is PredictorState.IDLE

    # Still usable afterwards
    assert predictor.forward("cafe", 1, recorder).ok


def test_from_config_reads_text_section(text_bundle):
    config = Config.from_dict(merge_configs(
        get_default_config().to_dict(), {"resources": {"directory": str(text_bundle)}}
    ))
    engine = FakeEngine(scores=[0.1, 0.2, 0.3, 0.4])

    predictor = NLPPredictor.from_config(config, engine=engine)

    assert engine.loaded_path == text_bundle / "model-reddit16.pt"
    assert predictor.labels == tuple(TEXT_LABELS)
