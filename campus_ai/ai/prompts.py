"""Prompt assembly — turns context, history and a question into messages.

The outbound message list always has the same shape:

    [system: context + instructions]
    [system: truncation notice]        (cheap tier, long history only)
    [history tail, verbatim]
    [user: current message]

The context renderers print every field, substituting a placeholder
("N/A", "None", "Not available", ...) for anything missing, so the model
can tell "unknown" apart from "empty".

Pure functions. Imports only models and schemas.
"""

from campus_ai.models import ModelTier, TaskComplexity
from campus_ai.schemas import ConversationMessage, CourseContext, StudentContext

# Trailing history messages kept per tier.
HISTORY_LIMITS: dict[ModelTier, int] = {
    ModelTier.CHEAP: 6,
    ModelTier.BALANCED: 10,
    ModelTier.SMART: 20,
}

TRUNCATION_NOTICE = (
    "Previous conversation summary: User has been asking about course content "
    "and received helpful responses."
)

NEW_CONVERSATION = "This is the start of a new conversation."

_RECAP_MESSAGES = 6
_RECAP_CLIP = 100


# ---------------------------------------------------------------------------
# Context rendering
# ---------------------------------------------------------------------------


def _join(items: list[str] | None, fallback: str) -> str:
    return ", ".join(items) if items else fallback


def render_course_context(context: CourseContext) -> str:
    """Renders a course as the "Course Information" block of a system prompt."""
    if context.assessment:
        assessment = ", ".join(f"{a.type} ({a.percentage:g}%)" for a in context.assessment)
    else:
        assessment = "No assessment info available"

    lines = [
        "Course Information:",
        f"- Code: {context.course_code or 'N/A'}",
        f"- Name: {context.course_name or 'N/A'}",
        f"- Instructor: {context.instructor or 'N/A'}",
        f"- Description: {context.description or 'N/A'}",
        f"- Outline: {_join(context.outline, 'No outline available')}",
        f"- Assessment: {assessment}",
    ]
    return "\n".join(lines)


def render_student_context(context: StudentContext) -> str:
    """Renders a student as the "Student Profile" block of a system prompt."""
    gpa = context.current_gpa if context.current_gpa else "Not available"
    lines = [
        "Student Profile:",
        f"- Student ID: {context.student_id or 'N/A'}",
        f"- Current GPA: {gpa}",
        f"- Enrolled Courses: {_join(context.enrolled_courses, 'None')}",
        f"- Completed Courses: {_join(context.completed_courses, 'None')}",
        f"- Struggling Subjects: {_join(context.struggling_subjects, 'None')}",
        f"- Weekly Study Hours: {context.study_hours or 0:g}",
        f"- Forum Participation: {context.active_forum_posts or 0} posts",
    ]
    return "\n".join(lines)


def render_conversation_recap(history: list[ConversationMessage]) -> str:
    """Short recap of the last few messages, each clipped to 100 characters."""
    if not history:
        return NEW_CONVERSATION

    lines = []
    for msg in history[-_RECAP_MESSAGES:]:
        content = msg.content[:_RECAP_CLIP]
        if len(msg.content) > _RECAP_CLIP:
            content += "..."
        lines.append(f"{msg.role}: {content}")
    return "Recent conversation context:\n" + "\n".join(lines)


# ---------------------------------------------------------------------------
# System messages per domain
# ---------------------------------------------------------------------------


def course_system_prompt(
    context: CourseContext,
    history: list[ConversationMessage],
    complexity: TaskComplexity,
) -> str:
    """System prompt for a course chat."""
    style = "detailed, well-reasoned" if complexity == TaskComplexity.COMPLEX else "concise, direct"
    return (
        f"{render_course_context(context)}\n\n"
        f"{render_conversation_recap(history)}\n\n"
        "You are an AI assistant helping students with course-specific questions. "
        f"Maintain conversation context and provide {style} responses. "
        "Reference previous conversation when relevant."
    )


def general_system_prompt(complexity: TaskComplexity) -> str:
    """System prompt for general university-life questions."""
    style = (
        "comprehensive, detailed" if complexity == TaskComplexity.COMPLEX else "concise, actionable"
    )
    return (
        "You are a helpful AI assistant for university students. "
        f"Provide {style} guidance on university life, study tips, and academic success."
    )


def academic_system_prompt(context: StudentContext, complexity: TaskComplexity) -> str:
    """System prompt for the academic advisor."""
    if complexity == TaskComplexity.COMPLEX:
        instruction = "Provide detailed analysis with specific recommendations and action plans."
    else:
        instruction = "Give focused, actionable advice."
    return f"{render_student_context(context)}. You are an AI academic advisor. {instruction}"


# ---------------------------------------------------------------------------
# History trimming + assembly
# ---------------------------------------------------------------------------


def trim_history(
    history: list[ConversationMessage], tier: ModelTier
) -> list[ConversationMessage]:
    """Keeps the tier's allowance of trailing history messages.

    The kept tail is verbatim. On the cheap tier a dropped prefix is
    replaced by a single system notice (not a real summary).
    """
    limit = HISTORY_LIMITS[tier]
    if len(history) <= limit:
        return list(history)

    tail = list(history[-limit:])
    if tier == ModelTier.CHEAP:
        return [ConversationMessage(role="system", content=TRUNCATION_NOTICE), *tail]
    return tail


def assemble_messages(
    system_prompt: str,
    history: list[ConversationMessage],
    message: str,
    tier: ModelTier,
) -> list[ConversationMessage]:
    """Builds the full outbound message list for one completion call."""
    return [
        ConversationMessage(role="system", content=system_prompt),
        *trim_history(history, tier),
        ConversationMessage(role="user", content=message),
    ]
