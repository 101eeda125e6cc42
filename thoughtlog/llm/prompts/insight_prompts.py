# Insight Generation Prompts
#
# The dashboard contract: every kind shares one output schema, only the
# focus block changes. The legacy contract is kept for the persisted pathway.

INSIGHT_OUTPUT_SCHEMA = """[
  {
    "type": "insight | action | suggestion | habit | pattern",
    "title": "Short headline (max 8 words)",
    "content": "Two to four sentences grounded in the entries",
    "priority": "high | medium | low",
    "category": "Name of the related category from the entries, or null"
  }
]"""

LEGACY_INSIGHT_OUTPUT_SCHEMA = """[
  {
    "insight_text": "A meaningful observation or pattern you noticed",
    "action_plan": "Specific, actionable suggestions based on this insight",
    "category_id": null
  }
]"""

INSIGHTS_FOCUS = """Focus on:
- Behavioral patterns and what drives them
- Emotional trends across the entries
- Goal progress and growth opportunities
- Life balance between work, health and relationships"""

ACTIONS_FOCUS = """Focus on:
- Concrete next steps the writer can take
- Each action must be specific and time-bound (e.g. "this week", "by Friday")
- Start every content field with a verb
- Prioritize actions that unblock recurring problems"""

SUGGESTIONS_FOCUS = """Focus on:
- Lifestyle adjustments suggested by the entries
- Habits worth starting or dropping
- Resources (books, tools, communities, routines) that fit the writer's interests
- Keep suggestions realistic for the writer's current situation"""

HABITS_FOCUS = """Focus on:
- Habits the writer is already building and how to reinforce them
- Habit stacking: attaching a new habit to an existing routine
- Simple ways to track consistency
- Small starting versions of habits that keep failing"""

PATTERNS_FOCUS = """Focus on:
- Temporal patterns: time of day, day of week, recurring dates
- Calendar rhythms such as busy weeks, weekends, month boundaries
- Themes that keep returning across categories
- Shifts in tone or topic over the covered period"""

GENERAL_FOCUS = """Focus on:
- The most notable observations across all entries
- Anything the writer would find useful to know about themselves"""

BASE_INSIGHT_SYSTEM_PROMPT = """You are an insightful AI analyst. Analyze these personal journal entries and provide meaningful, personalized observations.

Each entry is formatted as: [timestamp] (category) content
Entries are listed newest first.

{focus}

Generate 3-5 items. {type_rule}
Be encouraging, constructive, and specific. Refer to what the writer actually wrote.
Return ONLY a JSON array in this exact format, no markdown formatting:
{schema}"""

LEGACY_INSIGHT_SYSTEM_PROMPT = f"""You are an insightful AI analyst. Analyze these personal journal entries and provide meaningful insights about patterns, trends, or recommendations.

Generate 3-5 insights in JSON format:
{LEGACY_INSIGHT_OUTPUT_SCHEMA}

Focus on:
- Behavioral patterns
- Goal progress
- Emotional trends
- Life balance
- Growth opportunities

Be encouraging, constructive, and specific.
Return ONLY the JSON array, no markdown formatting."""


def get_insight_user_prompt(entries_text: str) -> str:
    """Wrap rendered entries for the user turn."""
    return f"Here are my recent journal entries:\n\n{entries_text}"
