"""Canned replies served when the AI provider can't be used.

Chosen by keyword on the last message of the prompt. The assistant uses
these for a missing API key and for any provider failure, so students
always get an answer.
"""

from campus_ai.schemas import ConversationMessage

COURSE_HELP = (
    "I'd be happy to help you with course-related questions! Based on the course "
    "context, I can provide information about the syllabus, assignments, and study "
    "materials. What specific aspect would you like to know more about?"
)

STUDY_TIPS = (
    "Here are some effective study strategies: 1) Create a structured study schedule, "
    "2) Use active learning techniques like summarizing and teaching concepts to "
    "others, 3) Take regular breaks using the Pomodoro technique, and 4) Form study "
    "groups with classmates. Would you like me to elaborate on any of these strategies?"
)

ACADEMIC_PERFORMANCE = (
    "Based on your academic performance data, I can see areas where you're excelling "
    "and others that might need more attention. Let me analyze your current progress "
    "and provide personalized recommendations to help improve your overall academic "
    "performance."
)

GREETING = (
    "I'm here to help you with your academic journey! Whether you need assistance "
    "with course content, study strategies, or academic planning, I'm ready to "
    "provide personalized guidance. What would you like to discuss?"
)

# Checked in order; first hit wins.
_KEYWORD_REPLIES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("course", "syllabus"), COURSE_HELP),
    (("study", "help"), STUDY_TIPS),
    (("grade", "performance"), ACADEMIC_PERFORMANCE),
)


def canned_reply(messages: list[ConversationMessage]) -> str:
    """Picks a canned reply for the last message in the prompt."""
    if not messages:
        return GREETING

    text = messages[-1].content.lower()
    for keywords, reply in _KEYWORD_REPLIES:
        if any(word in text for word in keywords):
            return reply
    return GREETING
