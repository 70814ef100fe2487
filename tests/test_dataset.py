"""
Tests for the FeatureDataset data model.
"""

import numpy as np
import pytest

from volbrush import FEATURE_NAMES, FeatureDataset, FeatureRecord


@pytest.fixture
def sample_dataset():
    rng = np.random.default_rng(7)
    index = np.arange(0, 40, 2, dtype=np.uint64)
    values = rng.random((len(index), 4), dtype=np.float32)
    return FeatureDataset(index, values)


class TestFeatureDataset:
    """Test construction, access and copies."""

    def test_construction_dtypes(self, sample_dataset):
        assert sample_dataset.element_index.dtype == np.uint64
        assert sample_dataset.values.dtype == np.float32
        assert len(sample_dataset) == 20

    def test_record_access(self, sample_dataset):
        record = sample_dataset[3]

        assert isinstance(record, FeatureRecord)
        assert record.element_index == 6
        np.testing.assert_allclose(record.values, sample_dataset.values[3])

    def test_iteration(self, sample_dataset):
        indices = [r.element_index for r in sample_dataset]

        assert indices == list(range(0, 40, 2))

    def test_from_records(self):
        ds = FeatureDataset.from_records(
            [FeatureRecord(0, (1.0, 2.0, 3.0, 4.0)), FeatureRecord(5, (5.0, 6.0, 7.0, 8.0))]
        )

        assert len(ds) == 2
        assert ds[1].values == (5.0, 6.0, 7.0, 8.0)

    def test_empty(self):
        ds = FeatureDataset.from_records([])

        assert len(ds) == 0
        assert ds.values.shape == (0, 4)
        assert ds.is_sorted()

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="values must be"):
            FeatureDataset([0, 1], np.zeros((2, 3)))

        with pytest.raises(ValueError, match="doesn't match"):
            FeatureDataset([0, 1, 2], np.zeros((2, 4)))

    def test_copy_is_independent(self, sample_dataset):
        copied = sample_dataset.copy()
        copied.values[0, 0] = -5.0

        assert sample_dataset.values[0, 0] != -5.0

    def test_copy_slice_mask(self, sample_dataset):
        mask = np.zeros(len(sample_dataset), dtype=bool)
        mask[[1, 4, 9]] = True
        sliced = sample_dataset.copy_slice(mask)

        np.testing.assert_array_equal(sliced.element_index, [2, 8, 18])
        sliced.values[0, 0] = -1.0
        assert sample_dataset.values[1, 0] != -1.0

    def test_copy_slice_wrong_mask_length(self, sample_dataset):
        with pytest.raises(ValueError, match="mask shape"):
            sample_dataset.copy_slice(np.ones(3, dtype=bool))


class TestOrderingInvariant:
    """Test sorting and validation of element indices."""

    def test_sort_by_index(self):
        ds = FeatureDataset([5, 1, 3], np.arange(12, dtype=np.float32).reshape(3, 4))
        assert not ds.is_sorted()

        sorted_ds = ds.sort_by_index()

        np.testing.assert_array_equal(sorted_ds.element_index, [1, 3, 5])
        np.testing.assert_array_equal(sorted_ds.values[0], [4, 5, 6, 7])
        sorted_ds.validate()

    def test_duplicates_are_invalid(self):
        ds = FeatureDataset([1, 1], np.zeros((2, 4)))

        with pytest.raises(ValueError, match="strictly increasing"):
            ds.validate()


class TestFeatureColumns:
    """Test named feature access and ranges."""

    def test_feature_by_name(self, sample_dataset):
        for k, name in enumerate(FEATURE_NAMES):
            np.testing.assert_array_equal(sample_dataset.feature(name), sample_dataset.values[:, k])

    def test_unknown_feature(self, sample_dataset):
        with pytest.raises(ValueError, match="not valid"):
            sample_dataset.feature("entropy")

    def test_value_ranges(self, sample_dataset):
        lo, hi = sample_dataset.value_ranges()

        np.testing.assert_array_equal(lo, sample_dataset.values.min(axis=0))
        np.testing.assert_array_equal(hi, sample_dataset.values.max(axis=0))
