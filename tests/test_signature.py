"""
Tests for hivescout.signature
=============================

Validates window signature extraction:
    - numeric harvesting from literal objects
    - variance / skewness moments
    - predicate entropy
    - spectral (FFT) entropy with power-of-two padding
    - batch signature frames
"""

from dataclasses import FrozenInstanceError

import numpy as np
import polars as pl
import pytest
from scipy import stats

from hivescout.core.types import SIGNATURE_METRICS, Signature, blank_node, literal, named_node, triple
from hivescout.signature import (
    SignatureExtractor,
    build_signature_frame,
    extract_signature,
    fft_entropy,
    harvest_numeric_values,
    next_power_of_two,
    pad_to_power_of_two,
    sample_skewness,
    sample_variance,
)


XSD = 'http://www.w3.org/2001/XMLSchema#'
EX = 'http://example.org/'


# =============================================================================
# Helpers
# =============================================================================

def _window(values, predicate=EX + 'p1', datatype=None):
    """Ordered window: one triple per value, distinct subjects."""
    return [
        triple(named_node(f'{EX}s{i}'), named_node(predicate), literal(v, datatype))
        for i, v in enumerate(values)
    ]


def _manual_spectral_entropy(values):
    padded = pad_to_power_of_two(np.asarray(values, dtype=float))
    mags = np.abs(np.fft.fft(padded))
    p = mags / mags.sum()
    p = p[p > 0]
    return float(-np.sum(p * np.log2(p)))


# =============================================================================
# Empty / tiny windows
# =============================================================================

class TestEmptyWindow:
    """An empty window is a zero signature, not an error."""

    def test_all_fields_zero(self):
        result = extract_signature(set())
        assert result == Signature()
        for name in SIGNATURE_METRICS:
            assert result.metric(name) == 0

    def test_empty_list_and_generator(self):
        assert extract_signature([]) == Signature()
        assert extract_signature(iter(())) == Signature()

    def test_single_value(self):
        result = extract_signature(_window(['42']))
        assert result.triple_count == 1
        assert result.variance == 0
        assert result.skewness == 0
        assert result.fft_entropy == 0

    def test_two_values_have_no_skewness(self):
        result = extract_signature(_window(['1', '100']))
        assert result.variance > 0
        assert result.skewness == 0


# =============================================================================
# Triple count
# =============================================================================

class TestTripleCount:
    """triple_count is the window size, numeric or not."""

    def test_counts_all_triples(self):
        window = _window(['1', '2', 'abc']) + [
            triple(EX + 's9', EX + 'knows', EX + 'o9'),
            triple(EX + 's10', EX + 'knows', blank_node('_:b1')),
        ]
        assert extract_signature(window).triple_count == 5

    def test_set_window(self):
        window = set(_window(['1', '2', '3', '4']))
        assert extract_signature(window).triple_count == 4


# =============================================================================
# Numeric harvesting
# =============================================================================

class TestHarvesting:
    """Permissive parse-and-skip rules for literal objects."""

    def test_untyped_literals_parsed(self):
        values = harvest_numeric_values(_window(['1', '2.5', '-3e2']))
        np.testing.assert_array_equal(values, [1.0, 2.5, -300.0])

    def test_numeric_and_string_datatypes_parsed(self):
        window = [
            triple(EX + 's1', EX + 'p', literal('42', XSD + 'integer')),
            triple(EX + 's2', EX + 'p', literal('1.5', XSD + 'decimal')),
            triple(EX + 's3', EX + 'p', literal('2.0', XSD + 'double')),
            triple(EX + 's4', EX + 'p', literal('3.0', XSD + 'float')),
            triple(EX + 's5', EX + 'p', literal('7', XSD + 'string')),
        ]
        np.testing.assert_array_equal(harvest_numeric_values(window), [42, 1.5, 2, 3, 7])

    def test_other_datatypes_skipped(self):
        window = [
            triple(EX + 's1', EX + 'p', literal('1', XSD + 'boolean')),
            triple(EX + 's2', EX + 'p', literal('2024', XSD + 'gYear')),
            triple(EX + 's3', EX + 'p', literal('5')),
        ]
        np.testing.assert_array_equal(harvest_numeric_values(window), [5.0])

    def test_unparseable_text_skipped(self):
        window = _window(['abc', '', 'NaN', 'Infinity', '-inf', '4'])
        np.testing.assert_array_equal(harvest_numeric_values(window), [4.0])

    def test_leading_number_of_text_used(self):
        values = harvest_numeric_values(_window(['42 kg', '3.5e2units', '1_000']))
        np.testing.assert_array_equal(values, [42.0, 350.0, 1.0])

    def test_unit_suffix_changes_moments(self):
        result = extract_signature(_window(['10 kg', '20 kg', '30 kg']))
        assert result.variance == pytest.approx(100.0)

    def test_signature_uses_harvested_values(self):
        window = _window(['4 m', 'abc', '1', '9.5e0x', '2']) + [
            triple(EX + 's9', EX + 'p', named_node('100')),
            triple(EX + 's10', EX + 'p', literal('1', XSD + 'boolean')),
        ]
        values = harvest_numeric_values(window)
        np.testing.assert_array_equal(values, [4.0, 1.0, 9.5, 2.0])

        result = extract_signature(iter(window))
        assert result.triple_count == 7
        assert result.variance == pytest.approx(sample_variance(values))
        assert result.skewness == pytest.approx(sample_skewness(values))
        assert result.fft_entropy == pytest.approx(fft_entropy(values))

    def test_non_literal_objects_skipped(self):
        window = [
            triple(EX + 's1', EX + 'p', named_node('5')),
            triple(EX + 's2', EX + 'p', blank_node('6')),
            triple(EX + 's3', EX + 'p', literal('7')),
        ]
        np.testing.assert_array_equal(harvest_numeric_values(window), [7.0])

    def test_order_preserved(self):
        values = harvest_numeric_values(_window(['9', '1', '5', '3']))
        np.testing.assert_array_equal(values, [9, 1, 5, 3])

    def test_malformed_values_do_not_raise(self):
        result = extract_signature(_window(['x', 'y', 'z']))
        assert result.triple_count == 3
        assert result.variance == 0
        assert result.fft_entropy == 0


# =============================================================================
# Moments
# =============================================================================

class TestMoments:
    """Sample variance and adjusted skewness."""

    def test_variance_one_to_five(self):
        result = extract_signature(_window(['1', '2', '3', '4', '5']))
        assert result.variance == pytest.approx(2.5)

    def test_variance_ten_twenty_thirty(self):
        result = extract_signature(_window(['10', '20', '30']))
        assert result.variance == 100

    def test_variance_order_independent(self):
        a = extract_signature(_window(['3', '1', '2']))
        b = extract_signature(_window(['1', '2', '3']))
        assert a.variance == pytest.approx(b.variance)
        assert a.skewness == pytest.approx(b.skewness)

    def test_skewness_symmetric(self):
        assert sample_skewness(np.array([-2, -1, 0, 1, 2])) == pytest.approx(0.0, abs=1e-12)

    def test_skewness_matches_adjusted_estimator(self):
        values = np.array([1.0, 2.0, 3.0, 10.0])
        expected = stats.skew(values, bias=False)
        assert sample_skewness(values) == pytest.approx(expected)

    def test_skewness_sign(self):
        assert sample_skewness(np.array([1.0, 2.0, 3.0, 10.0])) > 0
        assert sample_skewness(np.array([-10.0, 1.0, 2.0, 3.0])) < 0

    def test_constant_values_zero_skewness(self):
        assert sample_skewness(np.array([5.0, 5.0, 5.0, 5.0])) == 0
        assert sample_variance(np.array([5.0, 5.0, 5.0])) == 0


# =============================================================================
# Predicate entropy
# =============================================================================

class TestPredicateEntropy:
    """Shannon entropy (base 2) of the predicate distribution."""

    def test_two_predicates_even_split(self):
        window = (
            _window(['1', '2'], predicate=EX + 'p1')
            + [triple(EX + f's{i + 10}', EX + 'p2', literal(str(i))) for i in range(2)]
        )
        assert extract_signature(window).entropy == pytest.approx(1.0, abs=1e-5)

    def test_single_predicate_is_zero(self):
        assert extract_signature(_window(['1', '2', '3'])).entropy == 0

    def test_uses_non_numeric_triples(self):
        window = [
            triple(EX + 's1', EX + 'name', literal('alice')),
            triple(EX + 's2', EX + 'knows', EX + 's1'),
        ]
        assert extract_signature(window).entropy == pytest.approx(1.0)

    def test_uniform_five_predicates(self):
        window = [triple(EX + f's{i}', EX + f'p{i}', literal(str(i))) for i in range(5)]
        assert extract_signature(window).entropy == pytest.approx(np.log2(5))


# =============================================================================
# Spectral entropy
# =============================================================================

class TestSpectralEntropy:
    """FFT magnitude-spectrum entropy with zero padding."""

    def test_next_power_of_two(self):
        assert [next_power_of_two(n) for n in (1, 2, 3, 4, 5, 8, 9)] == [1, 2, 4, 4, 8, 8, 16]

    def test_padding_appends_zeros(self):
        np.testing.assert_array_equal(pad_to_power_of_two([1, 2, 3]), [1, 2, 3, 0])
        np.testing.assert_array_equal(pad_to_power_of_two([1, 2]), [1, 2])

    def test_fewer_than_two_values(self):
        assert fft_entropy(np.array([])) == 0
        assert fft_entropy(np.array([3.0])) == 0

    def test_all_zero_sequence(self):
        assert fft_entropy(np.zeros(6)) == 0

    def test_constant_concentrates_in_dc_bin(self):
        constant = extract_signature(_window(['5', '5', '5', '5']))
        varied = extract_signature(_window(['1', '7', '3', '9']))
        assert constant.fft_entropy == pytest.approx(0.0, abs=1e-9)
        assert constant.fft_entropy < varied.fft_entropy

    def test_ten_twenty_thirty_positive(self):
        assert extract_signature(_window(['10', '20', '30'])).fft_entropy > 0

    def test_periodic_sequence(self):
        """[1,0,1,0] → spectrum [2,0,2,0] → exactly one bit."""
        result = extract_signature(_window(['1', '0', '1', '0']))
        assert result.fft_entropy == pytest.approx(1.0)

    def test_matches_manual_computation(self):
        values = [1.0, 2.0, 3.0, 10.0, -4.0]
        assert fft_entropy(np.array(values)) == pytest.approx(_manual_spectral_entropy(values))

    def test_padding_changes_value(self):
        """[1,2,3] is padded to four bins; unpadded would give a different value."""
        unpadded = np.abs(np.fft.fft([1.0, 2.0, 3.0]))
        p = unpadded / unpadded.sum()
        unpadded_entropy = float(-np.sum(p * np.log2(p)))
        assert fft_entropy(np.array([1.0, 2.0, 3.0])) != pytest.approx(unpadded_entropy)

    def test_order_dependent(self):
        a = fft_entropy(np.array([1.0, 2.0, 3.0, 4.0]))
        b = fft_entropy(np.array([1.0, 3.0, 2.0, 4.0]))
        assert a != pytest.approx(b)


# =============================================================================
# Extractor object, determinism, serialization
# =============================================================================

class TestExtractor:

    def test_extractor_object_matches_function(self):
        window = _window(['1', '7', '3', '9'])
        assert SignatureExtractor().extract_signature(window) == extract_signature(window)
        assert SignatureExtractor()(window) == extract_signature(window)

    def test_deterministic(self):
        window = _window(['4', '8', '15', '16', '23', '42'])
        assert extract_signature(window) == extract_signature(window)

    def test_signature_is_immutable(self):
        signature = extract_signature(_window(['1', '2']))
        with pytest.raises(FrozenInstanceError):
            signature.variance = 10.0

    def test_to_dict_and_array(self):
        signature = extract_signature(_window(['1', '2', '3', '4', '5']))
        d = signature.to_dict()
        assert list(d) == list(SIGNATURE_METRICS)
        np.testing.assert_allclose(signature.as_array(), [d[m] for m in SIGNATURE_METRICS])


# =============================================================================
# Batch frames
# =============================================================================

class TestBuildSignatureFrame:
    """One signature row per window of a long triple table."""

    @pytest.fixture
    def triples_df(self):
        return pl.DataFrame({
            'window_id': ['w2', 'w2', 'w2', 'w1', 'w1', 'w1', 'w1'],
            'subject': [f'{EX}s{i}' for i in range(7)],
            'predicate': [EX + 'p1'] * 5 + [EX + 'p2'] * 2,
            'object': ['10', '20', '30', '5', '5', '7', '8'],
        })

    def test_one_row_per_window(self, triples_df):
        result = build_signature_frame(triples_df)
        assert result.height == 2
        assert result.columns == ['window_id', *SIGNATURE_METRICS]
        assert result['window_id'].to_list() == ['w1', 'w2']

    def test_values_match_single_extraction(self, triples_df):
        result = build_signature_frame(triples_df)
        w2 = result.filter(pl.col('window_id') == 'w2').row(0, named=True)
        assert w2['triple_count'] == 3
        assert w2['variance'] == pytest.approx(100.0)

        w1 = result.filter(pl.col('window_id') == 'w1').row(0, named=True)
        assert w1['entropy'] == pytest.approx(1.0)

    def test_without_window_column(self, triples_df):
        result = build_signature_frame(triples_df.drop('window_id'))
        assert result.height == 1
        assert result['triple_count'][0] == 7

    def test_empty_table(self):
        empty = pl.DataFrame(
            {'window_id': [], 'subject': [], 'predicate': [], 'object': []},
            schema={c: pl.Utf8 for c in ('window_id', 'subject', 'predicate', 'object')},
        )
        result = build_signature_frame(empty)
        assert result.height == 0
        assert 'fft_entropy' in result.columns
