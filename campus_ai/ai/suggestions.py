"""Follow-up suggestions and source labels attached to assistant answers."""

from campus_ai.schemas import CourseContext, StudentContext

GENERAL_SOURCES = ["study_guides.pdf", "academic_resources.md"]
ACADEMIC_SOURCES = ["academic_performance_data", "study_analytics"]

_MAX_COURSE_SUGGESTIONS = 3

_COURSE_TOPIC_SUGGESTIONS: tuple[tuple[tuple[str, ...], list[str]], ...] = (
    (
        ("outline", "topics"),
        [
            "Would you like detailed explanations of specific topics?",
            "Need study strategies for these topics?",
            "Want to know how topics connect to each other?",
        ],
    ),
    (
        ("description", "detail"),
        [
            "Would you like practical examples for these concepts?",
            "Need help with study materials for this topic?",
            "Want to know how this applies in real projects?",
        ],
    ),
    (
        ("exam", "test"),
        [
            "Would you like exam preparation strategies?",
            "Need help with practice questions?",
            "Want tips for effective revision?",
        ],
    ),
    (
        ("assignment", "project"),
        [
            "Need help with assignment planning?",
            "Want guidance on project structure?",
            "Need tips for time management?",
        ],
    ),
)


def course_sources(context: CourseContext) -> list[str]:
    """Documents the course answer is presented as drawing on."""
    code = context.course_code or "course"
    if context.instructor:
        instructor_file = f"{context.instructor.lower().replace(' ', '_', 1)}_notes.md"
    else:
        instructor_file = "instructor_notes.md"
    return [f"{code}_syllabus.pdf", instructor_file, f"course_outline_{code}.pdf"]


def course_suggestions(context: CourseContext, message: str) -> list[str]:
    text = message.lower()
    for keywords, suggestions in _COURSE_TOPIC_SUGGESTIONS:
        if any(word in text for word in keywords):
            return list(suggestions[:_MAX_COURSE_SUGGESTIONS])
    return [
        f"Would you like study tips for {context.course_name}?",
        "Need help understanding specific concepts?",
        "Want to know about assessment strategies?",
    ]


def general_suggestions(message: str) -> list[str]:
    text = message.lower()
    if "study" in text or "learning" in text:
        return [
            "Would you like specific study techniques?",
            "Need help with time management?",
            "Want to know about study groups?",
        ]
    if "time" in text or "schedule" in text:
        return [
            "Would you like a time management template?",
            "Need help prioritizing tasks?",
            "Want tips for work-life balance?",
        ]
    return [
        "Would you like more specific guidance?",
        "Need help with particular subjects?",
        "Want to explore student resources?",
    ]


def academic_suggestions(context: StudentContext) -> list[str]:
    """Suggestions driven by weak spots in the student's profile."""
    suggestions: list[str] = []

    if context.current_gpa and context.current_gpa < 3.0:
        suggestions.append("Focus on improving grades in struggling subjects")
    if context.study_hours and context.study_hours < 10:
        suggestions.append("Consider increasing weekly study hours")
    if context.struggling_subjects:
        suggestions.append("Get additional help for challenging subjects")
    if context.active_forum_posts and context.active_forum_posts < 5:
        suggestions.append("Increase forum participation for better learning")

    return suggestions or [
        "Keep up the good work!",
        "Consider joining study groups",
        "Utilize office hours with instructors",
    ]
