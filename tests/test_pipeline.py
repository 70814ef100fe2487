"""Tests for Pipeline (composing extraction, reduction and the interactive view)."""

import numpy as np
import pytest

from volbrush import (
    DatasetReducer,
    FeatureConfig,
    FeatureExtractor,
    FilterConfig,
    InteractiveFilter,
    Pipeline,
    ScalarGrid,
    SelectionState,
)


@pytest.fixture
def volume():
    """Sample uint16 volume for testing."""
    rng = np.random.default_rng(42)
    return ScalarGrid(rng.integers(0, 1000, size=(6, 8, 10), dtype=np.uint16))


class TestPipeline:
    """Test Pipeline functionality."""

    def test_initialization(self):
        pipeline = Pipeline()

        assert isinstance(pipeline.extractor, FeatureExtractor)
        assert pipeline.reducer is None
        assert pipeline.interactive is None
        assert pipeline.output is None

    def test_method_chaining(self):
        view = InteractiveFilter(config=FilterConfig(width=32, height=32))
        pipeline = Pipeline().features(FeatureConfig(include_std_dev=False)).drop(0.5).view(view)

        assert pipeline.extractor.config.include_std_dev is False
        assert pipeline.reducer.drop_ratio == 0.5
        assert pipeline.interactive is view

    def test_extract_only(self, volume):
        dataset = Pipeline()(volume)

        assert len(dataset) == 480
        assert dataset.is_sorted()

    def test_extract_and_reduce(self, volume):
        dataset = Pipeline().drop(0.75)(volume)

        assert abs(len(dataset) - 120) <= 1
        assert dataset.is_sorted()

    def test_zero_drop_removes_reducer(self):
        pipeline = Pipeline().drop(0.5).drop(0.0)

        assert pipeline.reducer is None

    def test_invalid_drop_ratio(self):
        with pytest.raises(ValueError, match="drop_ratio"):
            Pipeline().drop(1.0)

    def test_view_receives_dataset(self, volume):
        selection = SelectionState()
        view = InteractiveFilter(selection=selection, config=FilterConfig(width=64, height=64))
        pipeline = Pipeline().drop(0.5).view(view)

        dataset = pipeline(volume)

        assert view.dataset is dataset
        assert view.visible_mask.all()
        assert selection.brushing_indices == frozenset()

    def test_custom_reducer_stage(self, volume):
        pipeline = Pipeline(reducer=DatasetReducer(0.9))

        assert len(pipeline(volume)) <= 49

    def test_skip_keeps_previous_output(self, volume):
        view = InteractiveFilter(config=FilterConfig(width=32, height=32))
        pipeline = Pipeline().view(view)
        first = pipeline(volume)

        result = pipeline(ScalarGrid(np.ones((2, 2, 2), dtype=np.float32)))

        assert result is first
        assert pipeline.output is first
        assert view.dataset is first

    def test_skip_before_any_output(self):
        assert Pipeline()(ScalarGrid(np.ones((2, 2, 2), dtype=np.uint8))) is None

    def test_repr(self):
        pipeline = Pipeline().drop(0.25)

        assert "extract" in repr(pipeline)
        assert "0.25" in repr(pipeline)
