"""Tests for incidence relations and index views."""

import numpy as np
import pytest

from algx.examples import knuth_relation
from algx.relation import IndexView, MalformedRelationError, as_relation, incidence_matrix


class TestAsRelation:
    """Tests for as_relation."""

    def test_nested_lists(self):
        relation = as_relation([[1, 0], [0, 1]])
        assert relation.dtype == bool
        assert relation.shape == (2, 2)
        assert relation[0, 0] and not relation[0, 1]

    def test_boolean_array_kept(self):
        relation = knuth_relation()
        assert as_relation(relation) is relation

    def test_empty(self):
        assert as_relation([]).shape == (0, 0)

    def test_rows_without_columns(self):
        assert as_relation([[], [], []]).shape == (3, 0)

    def test_no_rows_with_width(self):
        with pytest.warns(UserWarning):
            assert as_relation([], n_cols=3).shape == (0, 3)
            assert as_relation(np.zeros((0, 5)), n_cols=3).shape == (0, 3)

    def test_ragged(self):
        with pytest.raises(MalformedRelationError) as excinfo:
            as_relation([[1, 0, 1], [1, 0]])
        assert excinfo.value.evidence == [2, 3]

    def test_not_two_dimensional(self):
        with pytest.raises(MalformedRelationError):
            as_relation(np.zeros(3, dtype=bool))

    def test_flat_list(self):
        with pytest.raises(MalformedRelationError):
            as_relation([1, 0, 1])

    def test_not_iterable(self):
        with pytest.raises(MalformedRelationError):
            as_relation(7)

    def test_not_boolean(self):
        with pytest.raises(MalformedRelationError):
            as_relation([[1, 2], [0, 1]])

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError):
            as_relation([[1], [1, 1]])

    def test_uncoverable_column_warns(self):
        with pytest.warns(UserWarning, match=r'\[2\]'):
            as_relation([[1, 1, 0], [1, 0, 0]])

    def test_no_rows_warns(self):
        with pytest.warns(UserWarning, match=r'\[0, 1, 2\]'):
            as_relation([], n_cols=3)


class TestIncidenceMatrix:
    """Tests for incidence_matrix."""

    def test_knuth_sets(self):
        subsets = [{1, 4, 7}, {1, 4}, {4, 5, 7}, {3, 5, 6}, {2, 3, 6, 7}, {2, 7}]
        relation, pieces, chunks = incidence_matrix(range(1, 8), subsets)
        assert np.array_equal(relation, knuth_relation())
        assert pieces == (1, 2, 3, 4, 5, 6, 7)
        assert chunks[1] == frozenset({1, 4})

    def test_outside_universe(self):
        with pytest.raises(MalformedRelationError) as excinfo:
            incidence_matrix('ab', ['a', 'bc'])
        assert excinfo.value.evidence == {'c'}

    def test_duplicate_pieces(self):
        with pytest.raises(MalformedRelationError):
            incidence_matrix('aab', ['a'])

    def test_empty_subset_is_all_false_row(self):
        relation, _, _ = incidence_matrix('ab', [set(), {'a'}])
        assert not relation[0].any()
        assert relation.shape == (2, 2)


class TestIndexView:
    """View narrowing keeps original indices."""

    def test_full(self):
        view = IndexView.full(knuth_relation())
        assert view.n_rows == 6
        assert view.n_cols == 7
        assert view.column_counts().tolist() == [2, 2, 2, 3, 2, 2, 4]

    def test_without_row(self):
        view = IndexView.full(knuth_relation()).without_row(1)
        # B = {1, 4} removes A, B and C
        assert view.original_rows() == (3, 4, 5)
        assert view.original_cols() == (1, 2, 4, 5, 6)

    def test_nested_views_map_back(self):
        relation = knuth_relation()
        view = IndexView.full(relation).without_row(1).without_row(3)
        assert view.original_rows() == (5,)
        assert view.original_cols() == (1, 6)
        assert np.array_equal(view.submatrix(), relation[np.ix_([5], [1, 6])])
        assert view.rows_covering(6).tolist() == [5]

    def test_inert_row_survives(self):
        relation = np.array([[0, 0, 0], [1, 1, 0], [0, 0, 1]], dtype=bool)
        view = IndexView.full(relation).without_row(1)
        assert view.original_rows() == (0, 2)
        assert view.original_cols() == (2,)

    def test_relation_untouched(self):
        relation = knuth_relation()
        IndexView.full(relation).without_row(0)
        assert np.array_equal(relation, knuth_relation())

    def test_repr(self):
        assert repr(IndexView.full(np.ones((1, 2), dtype=bool))) == 'IndexView(rows=[0], cols=[0, 1])'
