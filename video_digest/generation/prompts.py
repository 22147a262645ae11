"""Prompt templates for summarization and content-quality analysis."""

from __future__ import annotations

CHAPTER_SUMMARY_INSTRUCTION = (
    'Summarize this chapter of a YouTube video titled "{title}". '
    "Focus on the main points and key information. "
    "Keep the summary concise but informative."
)

FULL_SUMMARY_INSTRUCTION = (
    "Provide a comprehensive summary of this YouTube video transcript. "
    "Break down the main topics, key points, and important takeaways. "
    "Structure the summary in a clear and readable format."
)

SUMMARY_PROMPT_TEMPLATE = "{instruction}\n\nText to summarize:\n{text}"

ANALYSIS_CHAR_BUDGET = 500

CONTENT_ANALYSIS_PROMPT = """Analyze this YouTube video comprehensively but write a very concise summary. Keep your final analysis under {budget} characters total:

Title: {title}
Description: {description}
Full Transcript: {transcript}

Focus only on:
1. Is the title clickbait or honest?
2. Estimated percentage of substantial vs filler content
3. Key issues or misleading elements
4. 1-2 timestamped sections to skip
5. Overall value assessment

Keep your response under {budget} characters."""

STRUCTURED_SCHEMA_DESCRIPTION = """{
  "clickbaitScore": (number between 0-100),
  "contentValue": (string, one of: "low", "medium", "high"),
  "fluffPercentage": (number between 0-100),
  "keyIssues": (array of strings),
  "skipSections": (array of objects with format {"time": "MM:SS", "reason": "string"}),
  "verdict": (string summary)
}"""

STRUCTURING_PROMPT = """<s>[INST]Convert this video analysis to JSON format. Output ONLY the JSON object, no other text:

Analysis: {analysis}

Required JSON structure:
{schema}[/INST]</s>"""


def build_summary_prompt(instruction: str, text: str) -> str:
    return SUMMARY_PROMPT_TEMPLATE.format(instruction=instruction, text=text)


def build_chapter_prompt(title: str, text: str) -> str:
    return build_summary_prompt(CHAPTER_SUMMARY_INSTRUCTION.format(title=title), text)


def build_full_summary_prompt(text: str) -> str:
    return build_summary_prompt(FULL_SUMMARY_INSTRUCTION, text)


def build_analysis_prompt(title: str, description: str, transcript: str) -> str:
    """Stage A prompt: free-form clickbait/fluff analysis over the full transcript."""
    return CONTENT_ANALYSIS_PROMPT.format(
        budget=ANALYSIS_CHAR_BUDGET,
        title=title,
        description=description,
        transcript=transcript,
    )


def build_structuring_prompt(analysis: str) -> str:
    """Stage B prompt: wrap the Stage A text with the target JSON schema."""
    return STRUCTURING_PROMPT.format(analysis=analysis, schema=STRUCTURED_SCHEMA_DESCRIPTION)
