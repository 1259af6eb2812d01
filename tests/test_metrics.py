import numpy as np
import pytest

from supplierml.exceptions import InvalidMatrixError
from supplierml.models.metrics import compute_multiclass_metrics, per_class_metrics


def test_per_class_metrics_two_class_example():
    metrics = per_class_metrics([[5, 1], [2, 8]])

    assert [m.class_label for m in metrics] == ["Class 0", "Class 1"]

    class0, class1 = metrics
    assert (class0.precision, class0.recall, class0.f1) == (0.714, 0.833, 0.769)
    assert (class1.precision, class1.recall, class1.f1) == (0.889, 0.8, 0.842)


def test_perfect_classifier_scores_one_everywhere():
    metrics = per_class_metrics([[4, 0, 0], [0, 7, 0], [0, 0, 1]])

    assert len(metrics) == 3
    for m in metrics:
        assert m.precision == m.recall == m.f1 == 1.0


def test_class_without_occurrences_or_predictions_scores_zero():
    metrics = per_class_metrics([[3, 0, 1], [0, 0, 0], [2, 0, 5]])

    empty = metrics[1]
    assert empty.class_label == "Class 1"
    assert empty.precision == 0.0
    assert empty.recall == 0.0
    assert empty.f1 == 0.0


def test_never_predicted_class_has_zero_precision_and_recall():
    # class 1 occurs twice but is never predicted
    metrics = per_class_metrics([[3, 0], [2, 0]])

    assert metrics[1].precision == 0.0
    assert metrics[1].recall == 0.0
    assert metrics[0].precision == 0.6
    assert metrics[0].recall == 1.0


def test_all_zero_matrix_is_well_formed():
    metrics = per_class_metrics(np.zeros((3, 3), dtype=int))
    assert [(m.precision, m.recall, m.f1) for m in metrics] == [(0.0, 0.0, 0.0)] * 3


def test_random_matrices_stay_in_unit_interval_and_are_rounded():
    rng = np.random.default_rng(0)
    for size in (1, 2, 4, 7):
        matrix = rng.integers(0, 50, size=(size, size))
        metrics = per_class_metrics(matrix.tolist())

        assert len(metrics) == size
        for m in metrics:
            for value in (m.precision, m.recall, m.f1):
                assert 0.0 <= value <= 1.0
                assert round(value, 3) == value


def test_empty_matrix_yields_no_entries():
    assert per_class_metrics([]) == []


@pytest.mark.parametrize(
    "matrix",
    [
        [[1, 2, 3], [4, 5, 6]],
        [[1, 2], [3]],
        [1, 2, 3],
        [[1, -1], [0, 2]],
    ],
)
def test_invalid_matrix_is_rejected(matrix):
    with pytest.raises(InvalidMatrixError):
        per_class_metrics(matrix)


def test_compute_multiclass_metrics_perfect_predictions():
    y_true = np.array([0, 0, 1, 1, 2, 2])
    y_proba = np.array(
        [
            [0.9, 0.05, 0.05],
            [0.8, 0.1, 0.1],
            [0.1, 0.8, 0.1],
            [0.05, 0.9, 0.05],
            [0.1, 0.1, 0.8],
            [0.05, 0.05, 0.9],
        ]
    )

    result = compute_multiclass_metrics(y_true, y_true, y_proba, num_classes=3)

    assert result.micro_accuracy == 1.0
    assert result.macro_accuracy == 1.0
    assert result.confusion_matrix == [[2, 0, 0], [0, 2, 0], [0, 0, 2]]
    assert result.log_loss > 0
    # uniform prior over 3 classes has log loss ln(3)
    assert result.log_loss_reduction == pytest.approx(
        1 - result.log_loss / np.log(3)
    )


def test_macro_accuracy_averages_over_present_classes():
    y_true = np.array([0, 0, 0, 0, 1])
    y_pred = np.array([0, 0, 0, 0, 0])
    y_proba = np.array([[0.7, 0.2, 0.1]] * 5)

    result = compute_multiclass_metrics(y_true, y_pred, y_proba, num_classes=3)

    assert result.micro_accuracy == pytest.approx(0.8)
    # class 0 recall 1.0, class 1 recall 0.0; class 2 absent
    assert result.macro_accuracy == pytest.approx(0.5)
    assert len(result.confusion_matrix) == 3
    assert result.confusion_matrix[1] == [1, 0, 0]


def test_single_class_test_set_reports_no_log_loss_reduction():
    y_true = np.array([1, 1, 1])
    y_proba = np.array([[0.1, 0.9], [0.2, 0.8], [0.3, 0.7]])

    result = compute_multiclass_metrics(y_true, y_true, y_proba, num_classes=2)

    assert result.log_loss_reduction == 0.0
    assert result.confusion_matrix == [[0, 0], [0, 3]]
