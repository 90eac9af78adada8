"""Course outline fast path — answers "show me the syllabus" from catalog data.

Only a handful of literal phrasings trigger it; anything looser goes to
the model. The formatted answer is deterministic and costs nothing.
"""

import re

from campus_ai.schemas import CourseContext

OUTLINE_CONFIDENCE = 0.98

OUTLINE_SUGGESTIONS = [
    "Would you like more details about any specific topic?",
    "Need help with study strategies for this course?",
    "Want to know about assessment methods?",
]

_OUTLINE_REQUESTS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"^(show me |get |what is )?(the )?course outline$",
        r"^(show me |get |what is )?(the )?syllabus$",
        r"^course structure$",
        r"^what topics are covered$",
    )
)


def is_outline_request(message: str) -> bool:
    """True if the whole (trimmed) message is one of the outline phrasings."""
    text = message.strip()
    return any(p.fullmatch(text) for p in _OUTLINE_REQUESTS)


def has_outline(context: CourseContext | None) -> bool:
    return context is not None and bool(context.outline)


def format_outline(context: CourseContext) -> str:
    """Renders the course's outline, instructor and grading as markdown."""
    parts = [f"📚 **{context.course_name}** ({context.course_code})\n\n"]

    if context.description:
        parts.append(f"**Course Description:**\n{context.description}\n\n")

    if context.instructor:
        parts.append(f"**Instructor:** {context.instructor}\n\n")

    if context.outline:
        parts.append("**Course Outline:**\n")
        for index, topic in enumerate(context.outline, start=1):
            parts.append(f"{index}. {topic}\n")
        parts.append("\n")

    if context.assessment:
        parts.append("**Assessment Breakdown:**\n")
        for item in context.assessment:
            parts.append(f"• {item.type}: {item.percentage:g}%\n")
        parts.append("\n")

    parts.append(
        "This course outline was retrieved from the university database. "
        "Would you like more details about any specific topic or need study "
        "guidance for this course?"
    )
    return "".join(parts)
