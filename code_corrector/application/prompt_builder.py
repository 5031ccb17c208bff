from typing import Optional

from code_corrector.domain.languages import get_language

OUTPUT_SHAPE = (
    "{\n"
    '  "correctedCode": "the complete fixed code here",\n'
    '  "explanation": "detailed explanation of what was wrong and what you changed",\n'
    '  "issues": ["specific issue 1 that was found and fixed", "specific issue 2", "specific issue 3"]\n'
    "}"
)

FOCUS_AREAS = (
    "Focus on:\n"
    "1. Syntax errors and bugs\n"
    "2. Logic errors and potential runtime issues\n"
    "3. Best practices and code quality improvements\n"
    "4. Performance optimizations\n"
    "5. Security vulnerabilities"
)


def build_prompt(code: str, language: str, description: Optional[str] = None) -> str:
    lang = get_language(language)
    label = lang.label if lang else language

    sections = [
        f"You are an expert {label} developer and code reviewer. "
        "Analyze and fix this code. "
        "Respond with ONLY valid JSON in this exact format:",
        OUTPUT_SHAPE,
    ]

    if description and description.strip():
        sections.append(f"Context: {description.strip()}")

    sections.append(
        f"Code to analyze and fix ({language}):\n"
        f"```{language}\n"
        f"{code}\n"
        "```"
    )
    sections.append(FOCUS_AREAS)
    sections.append(
        "Provide the corrected code even if no major issues are found - you can still "
        "improve formatting, add comments, or optimize the code."
    )
    sections.append(
        "IMPORTANT: Return ONLY the JSON object, no other text, no markdown formatting, "
        "no explanations outside the JSON."
    )

    return "\n\n".join(sections)
