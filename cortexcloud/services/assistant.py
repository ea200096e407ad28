"""Rule-based assistant that answers from the user's own datasets and analyses.

Rules are checked top to bottom and the first match wins, so the order of
``RULES`` decides which reply fires for a message matching several topics.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from cortexcloud.core.config import settings
from cortexcloud.core.logging import get_logger
from cortexcloud.core.schemas import AnalysisStatus, ChatContext, ChatRole
from cortexcloud.db.models import Analysis, ChatMessage, Dataset, User
from cortexcloud.db.store import Store

logger = get_logger(__name__)


@dataclass(frozen=True)
class AssistantContext:
    datasets: list[Dataset] = field(default_factory=list)
    analyses: list[Analysis] = field(default_factory=list)

    def trend_descriptions(self) -> list[str]:
        return [
            trend.description
            for analysis in self.analyses
            if analysis.results
            for trend in analysis.results.trends
        ]

    def insights(self) -> list[str]:
        return [
            insight
            for analysis in self.analyses
            if analysis.results
            for insight in analysis.results.insights
        ]


@dataclass(frozen=True)
class AssistantRule:
    name: str
    matches: Callable[[str], bool]
    respond: Callable[[str, AssistantContext], str]


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)


def _bullets(lines: list[str]) -> str:
    return "\n".join(f"• {line}" for line in lines)


def _datasets_reply(_message: str, context: AssistantContext) -> str:
    if not context.datasets:
        return (
            "You haven't uploaded any datasets yet. Head over to the Upload page to add "
            "your first CSV or JSON file for analysis."
        )
    listing = _bullets(
        [
            f"{d.filename} ({d.row_count} rows, {d.column_count} columns)"
            for d in context.datasets[:3]
        ]
    )
    return (
        f"You have {len(context.datasets)} dataset(s) uploaded:\n\n{listing}\n\n"
        "Would you like me to analyze any specific dataset or explain its contents?"
    )


def _trends_reply(_message: str, context: AssistantContext) -> str:
    trends = context.trend_descriptions()[:3]
    if not trends:
        return (
            "I don't see any analyzed data with trend information yet. Run an analysis on "
            "your uploaded datasets to discover patterns and trends."
        )
    return (
        "Based on your analyzed data, here are the key trends I've identified:\n\n"
        f"{_bullets(trends)}\n\nWould you like me to dive deeper into any of these patterns?"
    )


def _insights_reply(_message: str, context: AssistantContext) -> str:
    insights = context.insights()[:4]
    if not insights:
        return (
            "No insights have been generated yet. Upload a dataset and run an analysis to "
            "get AI-powered insights about your data."
        )
    return (
        f"Here are the key insights from your data:\n\n{_bullets(insights)}\n\n"
        "Is there a specific aspect you'd like to explore further?"
    )


def _canned(text: str) -> Callable[[str, AssistantContext], str]:
    return lambda _message, _context: text


PREDICTIONS_REPLY = (
    "Our AI analysis includes predictive modeling based on your historical data. Check the "
    "Analysis page to see forecasts and predictions for your key metrics. The predictions use "
    "time-series analysis and pattern recognition to estimate future values."
)
ANOMALIES_REPLY = (
    "Anomaly detection is part of our analysis pipeline. We identify data points that deviate "
    "significantly from expected patterns using statistical methods. Check your analysis "
    "results for any flagged anomalies - they're marked by severity level (low, medium, high)."
)
HELP_REPLY = """Here's how to get the most out of CortexCloud:

1. **Upload Data** - Go to the Upload page and drag-drop your CSV or JSON files
2. **Run Analysis** - Click "Run AI Analysis" to process your data through our ML pipeline
3. **Explore Insights** - View trends, predictions, and anomalies in the Insights page
4. **Ask Questions** - Chat with me anytime about your data!

What would you like to do first?"""
ANALYSIS_REPLY = (
    "Our analysis pipeline processes your data through several stages:\n\n"
    "1. **Preprocessing** - Data cleaning and normalization\n"
    "2. **Pattern Detection** - Statistical analysis and trend identification\n"
    "3. **Prediction Models** - Time-series forecasting\n"
    "4. **Insight Generation** - Human-readable summaries\n\n"
    "Each analysis typically takes a few seconds. Would you like to run an analysis on one "
    "of your datasets?"
)
GREETING_REPLY = (
    "Hello! I'm the CortexCloud AI Assistant. I can help you:\n\n"
    "• Understand your uploaded datasets\n"
    "• Explain analysis results and trends\n"
    "• Provide insights about your data\n"
    "• Guide you through the platform\n\n"
    "What would you like to know?"
)


def _default_reply(message: str, _context: AssistantContext) -> str:
    quoted = message[:50] + ("..." if len(message) > 50 else "")
    return (
        f"I understand you're asking about \"{quoted}\". \n\n"
        "As your CortexCloud AI Assistant, I can help with:\n"
        "• Questions about your uploaded datasets\n"
        "• Explaining analysis results and trends\n"
        "• Interpreting predictions and anomalies\n"
        "• General platform guidance\n\n"
        "Could you be more specific about what you'd like to know? For example, try asking "
        "\"What trends do you see in my data?\" or \"How do I run an analysis?\""
    )


RULES: tuple[AssistantRule, ...] = (
    AssistantRule("datasets", _contains_any("dataset", "file", "upload"), _datasets_reply),
    AssistantRule("trends", _contains_any("trend", "pattern", "growth"), _trends_reply),
    AssistantRule("insights", _contains_any("insight", "finding", "discover"), _insights_reply),
    AssistantRule(
        "predictions", _contains_any("predict", "forecast", "future"), _canned(PREDICTIONS_REPLY)
    ),
    AssistantRule(
        "anomalies", _contains_any("anomal", "outlier", "unusual"), _canned(ANOMALIES_REPLY)
    ),
    AssistantRule("help", _contains_any("help", "start", "how"), _canned(HELP_REPLY)),
    AssistantRule("analysis", _contains_any("analy", "process", "run"), _canned(ANALYSIS_REPLY)),
    AssistantRule(
        "greeting",
        lambda text: "hello" in text or "hi" in text or text.startswith("hey"),
        _canned(GREETING_REPLY),
    ),
)


def generate_response(message: str, context: AssistantContext) -> tuple[str, str]:
    """Return the name of the matching rule and its reply."""
    lowered = message.lower()
    for rule in RULES:
        if rule.matches(lowered):
            return rule.name, rule.respond(message, context)
    return "default", _default_reply(message, context)


async def load_context(store: Store, user: User) -> AssistantContext:
    analyses = await store.list_analyses_by_user(user.id)
    return AssistantContext(
        datasets=await store.list_datasets(user.id),
        analyses=[a for a in analyses if a.status == AnalysisStatus.completed],
    )


async def chat(
    store: Store,
    user: User,
    message: str,
    context: ChatContext | None = None,
) -> ChatMessage:
    """Record the user's message, answer it and record the reply."""
    assistant_context = await load_context(store, user)
    await store.add_chat_message(
        ChatMessage(user_id=user.id, role=ChatRole.user, content=message, context=context)
    )

    rule_name, reply = generate_response(message, assistant_context)
    logger.info("assistant.chat.replied", rule=rule_name, message_length=len(message))

    return await store.add_chat_message(
        ChatMessage(user_id=user.id, role=ChatRole.assistant, content=reply)
    )


async def get_history(store: Store, user: User) -> list[ChatMessage]:
    return await store.list_chat_messages(user.id, settings.chat_history_limit)


async def clear_history(store: Store, user: User) -> None:
    await store.clear_chat_messages(user.id)
    logger.info("assistant.history.cleared")
