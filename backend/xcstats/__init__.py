"""XC Stats - cross-country scoring and course-normalization engine."""

__version__ = "0.1.0"
