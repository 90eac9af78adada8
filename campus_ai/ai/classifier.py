"""Task complexity classification — picks how hard a chat message is.

Ordered regex rule lists per chat domain (course, general, academic).
"Complex" rules are tried first, then "simple"; anything else is
"moderate". The academic domain also looks at the student's profile.

Also hosts the "cacheable" rule sets: which questions are generic enough
that one answer can be served to every student who asks them.

Pure functions, no state. Leaf service: imports only from models.
"""

import re

from campus_ai.models import TaskComplexity


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def _matches_any(patterns: tuple[re.Pattern[str], ...], message: str) -> bool:
    return any(p.search(message) for p in patterns)


# ---------------------------------------------------------------------------
# Rule sets
# ---------------------------------------------------------------------------

_COURSE_COMPLEX = _compile(
    r"explain.*why|analyze|compare|evaluate|justify|critique",
    r"relationship.*between|impact.*of|implications",
    r"multi-step|algorithm|proof|derive|solve.*equation",
    r"research|citation|reference|source",
)
_COURSE_SIMPLE = _compile(
    r"what.*is|define|list|when.*due|schedule|deadline",
    r"yes.*no|true.*false|simple.*question",
    r"outline|syllabus|instructor.*name",
)

_GENERAL_COMPLEX = _compile(
    r"career.*planning|life.*strategy|academic.*planning",
    r"complex.*problem|multiple.*factors|comprehensive.*advice",
    r"balance.*work.*study|time.*management.*system",
)
_GENERAL_SIMPLE = _compile(
    r"study.*tip|quick.*help|simple.*question",
    r"library.*hours|campus.*location|contact.*info",
    r"yes.*no|basic.*info",
)

_ACADEMIC_COMPLEX = _compile(
    r"academic.*plan|degree.*planning|career.*path",
    r"performance.*analysis|improvement.*strategy",
    r"course.*selection|major.*change",
)
_ACADEMIC_SIMPLE = _compile(
    r"current.*gpa|quick.*status|basic.*info",
    r"enrolled.*courses|completed.*courses",
)

_COURSE_CACHEABLE = _compile(
    r"syllabus|outline|schedule|deadline",
    r"instructor.*name|office.*hours",
    r"assignment.*due|exam.*date",
    r"what.*is.*course.*about",
    r"course.*description|course.*overview",
)
_GENERAL_CACHEABLE = _compile(
    r"study.*tips|time.*management|note.*taking",
    r"library.*hours|student.*services|campus.*resources",
    r"basic.*advice|general.*guidance",
)

# Student profile thresholds that force a "complex" academic classification.
_MAX_STRUGGLING_SUBJECTS = 2
_MIN_GPA = 2.5
_MAX_ENROLLED_COURSES = 6


def _classify(
    message: str,
    complex_rules: tuple[re.Pattern[str], ...],
    simple_rules: tuple[re.Pattern[str], ...],
) -> TaskComplexity:
    if _matches_any(complex_rules, message):
        return TaskComplexity.COMPLEX
    if _matches_any(simple_rules, message):
        return TaskComplexity.SIMPLE
    return TaskComplexity.MODERATE


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def classify_course_message(message: str) -> TaskComplexity:
    """Classifies a question asked in a course chat."""
    return _classify(message, _COURSE_COMPLEX, _COURSE_SIMPLE)


def classify_general_message(message: str) -> TaskComplexity:
    """Classifies a general university-life question."""
    return _classify(message, _GENERAL_COMPLEX, _GENERAL_SIMPLE)


def classify_academic_message(
    message: str,
    *,
    struggling_subjects: int = 0,
    current_gpa: float | None = None,
    enrolled_courses: int = 0,
) -> TaskComplexity:
    """Classifies an academic-performance question.

    A student with a difficult profile (more than 2 struggling subjects,
    GPA below 2.5, or more than 6 enrolled courses) always gets the
    complex treatment, whatever the wording.

    Args:
        message: The student's message.
        struggling_subjects: Number of subjects the student struggles with.
        current_gpa: Current GPA, None when unknown.
        enrolled_courses: Number of courses the student is enrolled in.

    Returns:
        The message's TaskComplexity.
    """
    difficult_profile = (
        struggling_subjects > _MAX_STRUGGLING_SUBJECTS
        or (current_gpa is not None and current_gpa < _MIN_GPA)
        or enrolled_courses > _MAX_ENROLLED_COURSES
    )
    if difficult_profile or _matches_any(_ACADEMIC_COMPLEX, message):
        return TaskComplexity.COMPLEX
    if _matches_any(_ACADEMIC_SIMPLE, message):
        return TaskComplexity.SIMPLE
    return TaskComplexity.MODERATE


def is_cacheable_course_query(message: str) -> bool:
    """True for course questions whose answer is the same for every student."""
    return _matches_any(_COURSE_CACHEABLE, message)


def is_cacheable_general_query(message: str) -> bool:
    """True for general questions whose answer is the same for every student."""
    return _matches_any(_GENERAL_CACHEABLE, message)
