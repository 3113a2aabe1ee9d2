import numpy as np
import pytest

from matimg import CellKind, DenseMatrix, InvalidDimensionsError, OptionalMatrix


@pytest.mark.parametrize(
    "data",
    [
        [[1, 2], [3]],          # 不规则
        [1, 2, 3],              # 1D
        np.zeros((2, 2, 2)),    # 3D
        [[]],                   # 0 列
    ],
)
def test_dense_rejects_bad_dimensions(data):
    with pytest.raises(InvalidDimensionsError):
        DenseMatrix(data)


def test_optional_rejects_ragged_rows():
    with pytest.raises(InvalidDimensionsError):
        OptionalMatrix([[1, None], [None]])


def test_dense_rejects_non_numeric():
    with pytest.raises(TypeError):
        DenseMatrix([["a", "b"], ["c", "d"]])


def test_dense_classify():
    m = DenseMatrix([[0, 3], [-2, 0]])
    assert m.shape == (2, 2)
    assert m.classify(0, 0) == (CellKind.ZERO, 0)
    assert m.classify(0, 1) == (CellKind.POSITIVE, 3)
    assert m.classify(1, 0) == (CellKind.NEGATIVE, -2)
    assert m.classify_all().tolist() == [
        [CellKind.ZERO, CellKind.POSITIVE],
        [CellKind.NEGATIVE, CellKind.ZERO],
    ]


def test_dense_nan_is_absent():
    m = DenseMatrix([[np.nan, 1.5]])
    assert m.classify(0, 0) == (CellKind.ABSENT, None)
    assert m.values().tolist() == [[0.0, 1.5]]


def test_optional_from_nested_none():
    m = OptionalMatrix([[None, 0], [4, -1]])
    assert m.dtype.kind == "i"
    assert m.classify(0, 0) == (CellKind.ABSENT, None)
    # 显式的 0 与缺失不同
    assert m.classify(0, 1) == (CellKind.ZERO, 0)
    assert m.classify(1, 0) == (CellKind.POSITIVE, 4)
    assert m.classify(1, 1) == (CellKind.NEGATIVE, -1)
    assert m.to_list() == [[None, 0], [4, -1]]


def test_optional_from_values_and_mask():
    m = OptionalMatrix(np.array([[1, 2], [3, 4]]), mask=[[True, False], [False, True]])
    assert m.to_list() == [[1, None], [None, 4]]

    with pytest.raises(InvalidDimensionsError):
        OptionalMatrix(np.array([[1, 2]]), mask=[[True], [False]])


def test_optional_float_nan_is_absent():
    m = OptionalMatrix(np.array([[np.nan, 2.0]]))
    assert m.to_list() == [[None, 2.0]]


def test_optional_empty_and_set():
    m = OptionalMatrix.empty(2, 3)
    assert m.shape == (2, 3)
    assert not m.present_mask().any()

    m.set(1, 2, 9)
    assert m.classify(1, 2) == (CellKind.POSITIVE, 9)
    m.set(1, 2, None)
    assert m.classify(1, 2) == (CellKind.ABSENT, None)

    with pytest.raises(IndexError):
        m.set(2, 0, 1)
    with pytest.raises(InvalidDimensionsError):
        OptionalMatrix.empty(0, 3)


def test_equality():
    a = OptionalMatrix([[None, 1]])
    b = OptionalMatrix(np.array([[7, 1]]), mask=[[False, True]])
    assert a == b  # 缺失位置的底层数值不参与比较
    assert a != OptionalMatrix([[None, 2]])
    assert DenseMatrix([[0, 1]]) != OptionalMatrix([[0, 1]])


def test_empty_set_keeps_fractional_values():
    m = OptionalMatrix.empty(2, 2)
    m.set(0, 0, 0.4)
    m.set(1, 1, 2.7)

    assert m.dtype == np.float64
    assert m.classify(0, 0) == (CellKind.POSITIVE, 0.4)
    assert m.classify(1, 1) == (CellKind.POSITIVE, 2.7)
    assert m.classify(0, 1) == (CellKind.ABSENT, None)


def test_empty_set_integral_values_keep_int_storage():
    m = OptionalMatrix.empty(1, 2, dtype=np.int8)
    m.set(0, 0, 3.0)
    assert m.dtype == np.int8
    assert m.classify(0, 0) == (CellKind.POSITIVE, 3)

    m.set(0, 1, 1000)
    assert m.dtype == np.float64
    assert m.to_list() == [[3.0, 1000.0]]
