"""Chat assistant — model tiering, response caching and fallback.

One entry point per chat domain (course, general, academic) plus a
generic generate() that dispatches on the context type. Each call:

1. (course) enriches the context from the course catalog, and answers
   literal outline requests straight from catalog data
2. classifies the message and picks a model tier
3. serves a cached answer for cacheable, student-independent questions
4. assembles the prompt and asks the provider
5. falls back to a canned reply when there is no provider or it fails

Operational failures never escape: the caller always gets a ChatResponse.
Only programmer errors (e.g. an unknown tier) raise.

Consumed by:
- api/chat.py — the HTTP handlers
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from campus_ai.ai import classifier, outline, prompts, suggestions
from campus_ai.ai.cache import ResponseCache, make_cache_key
from campus_ai.ai.fallback import canned_reply
from campus_ai.ai.providers.base import AIProvider
from campus_ai.ai.usage import log_ai_call
from campus_ai.hooks.interfaces import CourseCatalog
from campus_ai.models import (
    DATABASE_LOOKUP,
    ModelTier,
    TaskComplexity,
    UserMode,
    resolve_tier,
    select_tier,
)
from campus_ai.schemas import (
    AssessmentItem,
    ChatResponse,
    ConversationMessage,
    Course,
    CourseContext,
    StudentContext,
)

logger = logging.getLogger("campus_ai.ai.assistant")

_BASE_CONFIDENCE: dict[ModelTier, float] = {
    ModelTier.CHEAP: 0.75,
    ModelTier.BALANCED: 0.85,
    ModelTier.SMART: 0.95,
}
_COMPLEXITY_ADJUSTMENT: dict[TaskComplexity, float] = {
    TaskComplexity.SIMPLE: 0.05,
    TaskComplexity.MODERATE: 0.0,
    TaskComplexity.COMPLEX: -0.05,
}
_MIN_CONFIDENCE = 0.50
_MAX_CONFIDENCE = 0.99

# Confidence reported for cache hits.
_COURSE_CACHE_CONFIDENCE = 0.90
_GENERAL_CACHE_CONFIDENCE = 0.85

_GENERAL_CACHE_SCOPE = "university"

# Catalog courses carry no grading data.
_DEFAULT_ASSESSMENT = [
    AssessmentItem(type="Assignments", percentage=30),
    AssessmentItem(type="Midterm Exam", percentage=35),
    AssessmentItem(type="Final Exam", percentage=35),
]


def calculate_confidence(tier: ModelTier, complexity: TaskComplexity) -> float:
    """Presentation heuristic: tier base adjusted by complexity, clamped."""
    score = _BASE_CONFIDENCE[tier] + _COMPLEXITY_ADJUSTMENT[complexity]
    return min(_MAX_CONFIDENCE, max(_MIN_CONFIDENCE, score))


def estimate_cost(tokens_used: int, tier: ModelTier) -> float:
    """USD cost of tokens_used at the tier's per-million-token price."""
    return tokens_used / 1_000_000 * resolve_tier(tier).cost_per_million_tokens


def course_details_from_catalog(course: Course, fallback_code: str) -> dict:
    """Maps a catalog record to CourseContext fields."""
    return {
        "course_code": course.code or fallback_code,
        "course_name": course.name,
        "outline": list(course.outline),
        "instructor": course.coordinator,
        "description": (
            f"{course.name} - {course.unit_load} units, Semester {course.semester}, "
            f"Department: {course.department}"
        ),
        "assessment": list(_DEFAULT_ASSESSMENT),
    }


@dataclass(frozen=True)
class _ModelAnswer:
    """Provider text plus billed tokens (None for a canned fallback)."""

    content: str
    tokens_used: int | None

    @property
    def from_provider(self) -> bool:
        return self.tokens_used is not None


class ChatAssistant:
    """Cost-aware chat assistant for the university platform.

    Args:
        provider: Completion provider. None means no API credential is
            configured; every model call then returns a canned reply.
        cache: Shared response cache, created once at startup.
        default_mode: UserMode for course and general chats when the
            caller doesn't pick one.
        catalog: Optional course catalog for context enrichment.
    """

    def __init__(
        self,
        provider: AIProvider | None,
        cache: ResponseCache,
        *,
        default_mode: UserMode = UserMode.BALANCED,
        catalog: CourseCatalog | None = None,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._default_mode = default_mode
        self._catalog = catalog

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def has_provider(self) -> bool:
        return self._provider is not None

    async def aclose(self) -> None:
        """Releases the provider's network resources."""
        if self._provider is not None:
            await self._provider.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def generate(
        self,
        message: str,
        context: CourseContext | StudentContext | None = None,
        conversation_history: list[ConversationMessage] | None = None,
        user_mode: UserMode | None = None,
    ) -> ChatResponse:
        """Answers a message in the domain implied by the context type.

        CourseContext → course chat, StudentContext → academic advisor,
        no context → general university questions.
        """
        history = conversation_history or []
        if isinstance(context, CourseContext):
            return await self.generate_course_response(message, context, history, user_mode)
        if isinstance(context, StudentContext):
            return await self.generate_academic_response(message, context, history, user_mode)
        return await self.generate_general_response(message, history, user_mode)

    async def generate_course_response(
        self,
        message: str,
        context: CourseContext,
        conversation_history: list[ConversationMessage],
        user_mode: UserMode | None = None,
    ) -> ChatResponse:
        """Answers a question inside a course chat.

        Literal outline requests are answered from catalog data. Only the
        first message of a conversation is looked up in or written to the
        cache, and only when it is a cacheable course question.

        Args:
            message: The student's question.
            context: What the caller knows about the course.
            conversation_history: Prior messages, oldest first.
            user_mode: Cost/quality override; None uses the default mode.

        Returns:
            The assistant's answer. Never raises for provider failures.
        """
        started = time.monotonic()
        context = await self._enrich_course_context(context)

        if outline.is_outline_request(message) and outline.has_outline(context):
            response = ChatResponse(
                response=outline.format_outline(context),
                confidence=outline.OUTLINE_CONFIDENCE,
                sources=suggestions.course_sources(context),
                suggestions=list(outline.OUTLINE_SUGGESTIONS),
                cached=False,
                model=DATABASE_LOOKUP,
                tokens_used=0,
                estimated_cost=0.0,
            )
            self._log("course", response, None, None, started)
            return response

        complexity = classifier.classify_course_message(message)
        tier = select_tier(complexity, user_mode or self._default_mode)

        cacheable = not conversation_history and classifier.is_cacheable_course_query(message)
        cache_key = make_cache_key("course", context.course_code, message)
        if cacheable:
            entry = self._cache.get(cache_key)
            if entry is not None:
                response = ChatResponse(
                    response=entry.content,
                    confidence=_COURSE_CACHE_CONFIDENCE,
                    sources=suggestions.course_sources(context),
                    suggestions=suggestions.course_suggestions(context, message),
                    cached=True,
                    model=entry.model,
                )
                self._log("course", response, tier, complexity, started)
                return response

        messages = prompts.assemble_messages(
            prompts.course_system_prompt(context, conversation_history, complexity),
            conversation_history,
            message,
            tier,
        )
        answer = await self._complete(messages, tier)

        response = self._build_response(
            answer,
            tier,
            complexity,
            sources=suggestions.course_sources(context),
            follow_ups=suggestions.course_suggestions(context, message),
        )
        if cacheable and answer.from_provider:
            self._cache.put(cache_key, content=response.response, model=response.model)
        self._log("course", response, tier, complexity, started)
        return response

    async def generate_general_response(
        self,
        message: str,
        conversation_history: list[ConversationMessage],
        user_mode: UserMode | None = None,
    ) -> ChatResponse:
        """Answers a general university-life question.

        Cacheable questions are served from the cache regardless of how
        far into the conversation they are asked.
        """
        started = time.monotonic()
        complexity = classifier.classify_general_message(message)
        tier = select_tier(complexity, user_mode or self._default_mode)

        cacheable = classifier.is_cacheable_general_query(message)
        cache_key = make_cache_key("general", _GENERAL_CACHE_SCOPE, message)
        if cacheable:
            entry = self._cache.get(cache_key)
            if entry is not None:
                response = ChatResponse(
                    response=entry.content,
                    confidence=_GENERAL_CACHE_CONFIDENCE,
                    sources=list(suggestions.GENERAL_SOURCES),
                    suggestions=suggestions.general_suggestions(message),
                    cached=True,
                    model=entry.model,
                )
                self._log("general", response, tier, complexity, started)
                return response

        messages = prompts.assemble_messages(
            prompts.general_system_prompt(complexity),
            conversation_history,
            message,
            tier,
        )
        answer = await self._complete(messages, tier)

        response = self._build_response(
            answer,
            tier,
            complexity,
            sources=list(suggestions.GENERAL_SOURCES),
            follow_ups=suggestions.general_suggestions(message),
        )
        if cacheable and answer.from_provider:
            self._cache.put(cache_key, content=response.response, model=response.model)
        self._log("general", response, tier, complexity, started)
        return response

    async def generate_academic_response(
        self,
        message: str,
        student_context: StudentContext,
        conversation_history: list[ConversationMessage],
        user_mode: UserMode | None = None,
    ) -> ChatResponse:
        """Answers an academic-performance question. Never cached.

        Without an explicit mode the advisor runs in smart mode: profile
        analysis is where the bigger model pays off.
        """
        started = time.monotonic()
        complexity = classifier.classify_academic_message(
            message,
            struggling_subjects=len(student_context.struggling_subjects or []),
            current_gpa=student_context.current_gpa,
            enrolled_courses=len(student_context.enrolled_courses or []),
        )
        tier = select_tier(complexity, user_mode or UserMode.SMART)

        messages = prompts.assemble_messages(
            prompts.academic_system_prompt(student_context, complexity),
            conversation_history,
            message,
            tier,
        )
        answer = await self._complete(messages, tier)

        response = self._build_response(
            answer,
            tier,
            complexity,
            sources=list(suggestions.ACADEMIC_SOURCES),
            follow_ups=suggestions.academic_suggestions(student_context),
        )
        self._log("academic", response, tier, complexity, started)
        return response

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _complete(
        self, messages: list[ConversationMessage], tier: ModelTier
    ) -> _ModelAnswer:
        """Asks the provider; any failure degrades to a canned reply."""
        model_config = resolve_tier(tier)

        if self._provider is None:
            return _ModelAnswer(content=canned_reply(messages), tokens_used=None)

        try:
            completion = await self._provider.complete(
                messages=messages, model_config=model_config
            )
        except Exception as exc:
            logger.warning("AI service call failed (%s): %s", model_config.name, exc)
            return _ModelAnswer(content=canned_reply(messages), tokens_used=None)

        if not isinstance(completion.content, str):
            logger.warning(
                "AI service returned non-text content (%s): %s",
                model_config.name,
                type(completion.content).__name__,
            )
            return _ModelAnswer(content=canned_reply(messages), tokens_used=None)

        return _ModelAnswer(content=completion.content, tokens_used=completion.usage.total_tokens)

    def _build_response(
        self,
        answer: _ModelAnswer,
        tier: ModelTier,
        complexity: TaskComplexity,
        *,
        sources: list[str],
        follow_ups: list[str],
    ) -> ChatResponse:
        tokens = answer.tokens_used
        return ChatResponse(
            response=answer.content,
            confidence=calculate_confidence(tier, complexity),
            sources=sources,
            suggestions=follow_ups,
            cached=False,
            model=resolve_tier(tier).name,
            tokens_used=tokens,
            estimated_cost=estimate_cost(tokens, tier) if tokens else None,
        )

    async def _enrich_course_context(self, context: CourseContext) -> CourseContext:
        """Overlays catalog data on the caller's context, when available.

        Looks the course up by exact code, then by code search (first
        match). Catalog failures are logged and the caller's context is
        used unchanged.
        """
        if self._catalog is None or not context.course_code:
            return context

        try:
            course = await self._catalog.get_course_by_code(context.course_code)
            if course is None:
                matches = await self._catalog.search_courses_by_code(context.course_code)
                course = matches[0] if matches else None
        except Exception:
            logger.warning(
                "Course catalog lookup failed for %s", context.course_code, exc_info=True
            )
            return context

        if course is None:
            return context
        return context.model_copy(
            update=course_details_from_catalog(course, context.course_code)
        )

    def _log(
        self,
        domain: str,
        response: ChatResponse,
        tier: ModelTier | None,
        complexity: TaskComplexity | None,
        started: float,
    ) -> None:
        log_ai_call(
            domain=domain,
            model=response.model,
            tier=tier.value if tier else None,
            complexity=complexity.value if complexity else None,
            tokens_used=response.tokens_used or 0,
            estimated_cost=response.estimated_cost or 0.0,
            latency_ms=(time.monotonic() - started) * 1000,
            cached=response.cached,
        )
