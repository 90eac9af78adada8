"""In-memory course catalog — development stub for CourseCatalog.

Python dict-backed course records, indexed by id and by code. Data lives
only in memory and is lost on restart.

TEAM: Replace this with a query against the course module's table.
Subclass CourseCatalog from campus_ai.hooks.interfaces and implement all
three abstract methods.

Usage:
    from campus_ai.hooks.database import InMemoryCourseCatalog

    catalog = InMemoryCourseCatalog([course])
    await catalog.get_course_by_code("CSC101")
"""

from collections.abc import Iterable

from campus_ai.hooks.interfaces import CourseCatalog
from campus_ai.schemas import Course


class InMemoryCourseCatalog(CourseCatalog):
    """STUB — dict-backed course lookup, loses data on restart.

    Codes are matched exactly by get_course_by_code and as a
    case-insensitive substring by search_courses_by_code (insertion
    order, exact-prefix matches first).
    """

    def __init__(self, courses: Iterable[Course] = ()) -> None:
        """Initialises the catalog with optional seed courses."""
        self._by_id: dict[str, Course] = {}
        self._by_code: dict[str, Course] = {}
        for course in courses:
            self.add_course(course)

    def add_course(self, course: Course) -> None:
        """Adds or replaces a course record."""
        self._by_id[course.id] = course
        self._by_code[course.code] = course

    async def get_course_by_code(self, code: str) -> Course | None:
        return self._by_code.get(code)

    async def get_course_by_id(self, course_id: str) -> Course | None:
        return self._by_id.get(course_id)

    async def search_courses_by_code(self, code: str) -> list[Course]:
        """Substring search on course codes, prefix matches first."""
        fragment = code.lower()
        if not fragment:
            return []
        matches = [c for c in self._by_code.values() if fragment in c.code.lower()]
        return sorted(matches, key=lambda c: not c.code.lower().startswith(fragment))
