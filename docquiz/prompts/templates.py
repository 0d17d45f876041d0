"""Quiz Templates - Prompts e tool schemas para geracao estruturada."""

from ..models.enums import QuizDifficulty

# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

QUIZ_SYSTEM_PROMPT = (
    "You are an expert examiner who writes conceptually demanding multiple-choice "
    "questions from study material. Always answer by calling the provided tool."
)

ANALYSIS_SYSTEM_PROMPT = (
    "You are a professor and learning researcher who analyses quiz performance and "
    "writes precise, time-bound remediation plans. Always answer by calling the "
    "provided tool."
)

# =============================================================================
# DIFICULDADE
# =============================================================================

# Construcao das alternativas por nivel
DIFFICULTY_GUIDELINES = {
    QuizDifficulty.EASY: (
        "Two distractors should be plausible but incorrect; one should be an obvious trap."
    ),
    QuizDifficulty.MEDIUM: (
        "All options should seem correct at first glance, but one must be conceptually "
        "flawed to catch surface-level thinking."
    ),
    QuizDifficulty.HARD: (
        "Options must require multi-step reasoning, mixing numbers, units and "
        "'almost correct but subtly wrong' statements."
    ),
}

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

QUIZ_GENERATION_PROMPT = """Using ONLY the attached study material, write a multiple-choice quiz.

DIFFICULTY: {difficulty}

QUESTION COVERAGE:
- Cover every topic of the material, weighting the most important concepts highest.
- Do not test rote memorisation; test application, analysis and reasoning.

QUESTION TYPES (mix them):
- Scenario-based questions that apply theory to a practical situation.
- Assertion & reasoning questions that demand logical thinking.
- Concept replacement: what could substitute a missing component, and why.
- "What happens if" questions about dependencies and causation.

OPTIONS:
- Between {min_options} and {max_options} options per question, no repeated options.
- {option_guideline}
- Never give the answer away: the difference must be subtle but clear to someone
  who truly understands the topic.
- correctAnswer is the zero-based index of the correct option.

EXPLANATIONS:
- Precise and in simple language, explaining why the correct option is right AND
  why the other options are wrong, so the learner gains something even when wrong.

Return the quiz by calling the `{tool_name}` tool."""


ANALYSIS_PROMPT = """I took a quiz with {total_questions} questions at difficulty "{difficulty}".
I answered {correct_count} correctly, {incorrect_count} incorrectly and left {unanswered_count} unanswered ({score_percent}%).

Per-question results (userAnswer is null when unanswered):
{question_records}

Analyse my performance:
1. Understanding level (Beginner, Intermediate, Advanced or Expert), my thought process
   (memorisation, partial understanding or deep clarity) and how to level up.
2. The exact concepts I lack, why I struggled and the misconception behind each mistake.
3. Patterns of mistakes and focused strategies to improve.
4. Specific study topics and resources, each with a realistic time estimate.
5. Which concepts to focus on next for maximum improvement in minimal time.

Prioritise my weaknesses, not what I already know. Return the report by calling the
`{tool_name}` tool."""


# =============================================================================
# TOOL SCHEMAS (structured output)
# =============================================================================

QUESTION_SET_TOOL = {
    "name": "submit_quiz",
    "description": "Submit the generated multiple-choice quiz.",
    "input_schema": {
        "type": "object",
        "properties": {
            "questions": {
                "type": "array",
                "minItems": 1,
                "items": {
                    "type": "object",
                    "properties": {
                        "question": {"type": "string"},
                        "options": {
                            "type": "array",
                            "items": {"type": "string"},
                            "minItems": 2,
                            "maxItems": 7,
                        },
                        "correctAnswer": {"type": "integer", "minimum": 0},
                        "explanation": {"type": "string"},
                    },
                    "required": ["question", "options", "correctAnswer", "explanation"],
                },
            }
        },
        "required": ["questions"],
    },
}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

ANALYSIS_REPORT_TOOL = {
    "name": "submit_performance_analysis",
    "description": "Submit the structured performance analysis and study plan.",
    "input_schema": {
        "type": "object",
        "properties": {
            "overallUnderstanding": {"type": "string"},
            "knowledgeGaps": _STRING_LIST,
            "areasForImprovement": _STRING_LIST,
            "suggestedStudyTopics": _STRING_LIST,
            "suggestedResources": _STRING_LIST,
            "nextFocusConcepts": _STRING_LIST,
        },
        "required": [
            "overallUnderstanding",
            "knowledgeGaps",
            "areasForImprovement",
            "suggestedStudyTopics",
            "suggestedResources",
            "nextFocusConcepts",
        ],
    },
}
