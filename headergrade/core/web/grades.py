# core/web/grades.py

# Lower bounds are inclusive and checked top-down.
COARSE_GRADES: tuple[tuple[int, str], ...] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
    (50, "E"),
)

FINE_GRADES: tuple[tuple[int, str], ...] = (
    (97, "A+"),
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (67, "D+"),
    (63, "D"),
    (60, "D-"),
)

LOWEST_GRADE = "F"


def _check_score(score: int) -> None:
    if isinstance(score, bool) or not isinstance(score, int):
        raise TypeError(f"Score must be an int, got {type(score).__name__}")
    if not 0 <= score <= 100:
        raise ValueError(f"Score {score} outside 0..100")


def _lookup(score: int, scale: tuple[tuple[int, str], ...]) -> str:
    _check_score(score)
    for threshold, grade in scale:
        if score >= threshold:
            return grade
    return LOWEST_GRADE


def grade_of(score: int) -> str:
    """Coarse A-F grade. This is the grade persisted on scan records."""
    return _lookup(score, COARSE_GRADES)


def fine_grade_of(score: int) -> str:
    """Fine +/- modified grade (A+ ... D-, F), for display only."""
    return _lookup(score, FINE_GRADES)
