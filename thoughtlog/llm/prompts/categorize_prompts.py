"""
Prompts for entry categorization.
"""

CATEGORIZE_OUTPUT_SCHEMA = """{
  "categoryName": "Short category name, or null",
  "reasoning": "Brief explanation of why this category was chosen"
}"""


def get_categorize_system_prompt() -> str:
    """
    Get the system prompt for categorizing a single entry.

    The model is steered toward broad, reusable themes so that repeated
    entries land in the same category instead of fragmenting.
    """
    return f"""You are an intelligent categorization assistant. Analyze the user's thought/entry and suggest the most appropriate category. Categories should be simple, broad themes like: Gym, Job Hunt, Travel Ideas, Personal Growth, Health, Work, Relationships, Hobbies, Goals, etc.

## RULES
1. Keep categories general and reusable. Prefer an existing broad theme over a narrow one.
2. Use a short name of one to three words in Title Case.
3. If the content doesn't fit any clear category, return null for categoryName.
4. Return ONLY a JSON object. No markdown formatting, no explanations outside the JSON.

## FORMAT
{CATEGORIZE_OUTPUT_SCHEMA}

## EXAMPLES

Input: "Hit a new deadlift PR today, 140kg"
Output: {{"categoryName": "Gym", "reasoning": "Describes strength training progress"}}

Input: "asdf"
Output: {{"categoryName": null, "reasoning": "No identifiable theme"}}
"""


def get_categorize_user_prompt(content: str) -> str:
    """The entry is sent verbatim."""
    return content
