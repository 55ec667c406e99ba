import re

from interview_sim.models.evaluation import CodeQuality, Complexity, Sentiment, StarFlags, TextAnalysis

# Keyword lists are English-only; other languages only receive length/structure credit.
EXAMPLE_PATTERN = re.compile(
    r"\b(example|for instance|such as|like|consider|imagine|suppose)\b",
    re.IGNORECASE,
)
TECHNICAL_TERM_PATTERN = re.compile(
    r"\b(algorithm|complexity|performance|scale|optimize|architecture|design|implement|framework|library"
    r"|database|api|system|server|client|cache|queue|hash|tree|graph|stack|heap)\b",
    re.IGNORECASE,
)
QUANTIFICATION_PATTERN = re.compile(
    r"\d+(?:\.\d+)?\s*%|\$\s?\d+|\b\d+(?:\.\d+)?x\b"
    r"|\b(reduced|increased|improved|saved|times|faster|slower|more|less)\b",
    re.IGNORECASE,
)
REFLECTION_PATTERN = re.compile(r"\b(learned|takeaway|reflection|insight|next time)\b", re.IGNORECASE)
COMPLEXITY_ANALYSIS_PATTERN = re.compile(r"\bcomplexity\b|\bbig[- ]?o\b|\bO\([^)\n]+\)", re.IGNORECASE)

STAR_PATTERNS: dict[str, re.Pattern[str]] = {
    "situation": re.compile(r"\b(situation|context|background|scenario|project|challenge)\b", re.IGNORECASE),
    "task": re.compile(r"\b(task|goal|objective|responsibility|role|needed)\b", re.IGNORECASE),
    "action": re.compile(r"\b(action|did|approach|solution|implemented|decided|strategy)\b", re.IGNORECASE),
    "result": re.compile(r"\b(result|outcome|impact|achieved|improved|success|learned)\b", re.IGNORECASE),
}

CODE_MARKER_PATTERN = re.compile(r"```|`[^`\n]+`")
CODE_KEYWORD_PATTERN = re.compile(r"\b(function|class|def|var|let|const)\s")
COMMENT_PATTERN = re.compile(r"//|/\*|#")
ASSIGNMENT_PATTERN = re.compile(r"\b[a-zA-Z_][a-zA-Z0-9_]*\s*=[^=]")
ERROR_HANDLING_PATTERN = re.compile(r"\b(try|catch|except|error|throw|raise)\b", re.IGNORECASE)

BULLET_LINE_PATTERN = re.compile(r"^\s*[•\-*]\s", re.MULTILINE)
NUMBERED_LINE_PATTERN = re.compile(r"^\s*\d+[.)]\s", re.MULTILINE)
PARAGRAPH_BREAK_PATTERN = re.compile(r"\n\s*\n")
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")

POSITIVE_PATTERN = re.compile(
    r"\b(success|achieved|improved|good|great|excellent|effective|efficient)\b",
    re.IGNORECASE,
)
NEGATIVE_PATTERN = re.compile(
    r"\b(failed|problem|difficult|challenge|issue|mistake|wrong)\b",
    re.IGNORECASE,
)


def analyze_answer(answer_text: str, mode: str) -> TextAnalysis:
    """Derive structural and lexical signals from a free-form answer."""
    text = answer_text or ""
    word_count = len(text.split())

    return TextAnalysis(
        wordCount=word_count,
        charCount=len(text),
        hasStructure=has_structure(text),
        hasExamples=bool(EXAMPLE_PATTERN.search(text)),
        hasTechnicalTerms=len(TECHNICAL_TERM_PATTERN.findall(text)) > 2,
        hasQuantification=bool(QUANTIFICATION_PATTERN.search(text)),
        hasReflection=bool(REFLECTION_PATTERN.search(text)),
        hasComplexityAnalysis=bool(COMPLEXITY_ANALYSIS_PATTERN.search(text)),
        starFlags=detect_star_flags(text) if mode == "Behavioral" else None,
        codeQuality=analyze_code_quality(text) if mode == "Technical" else None,
        complexity=analyze_complexity(text, word_count),
        sentiment=analyze_sentiment(text),
    )


def has_structure(text: str) -> bool:
    paragraphs = [chunk for chunk in PARAGRAPH_BREAK_PATTERN.split(text.strip()) if chunk.strip()]
    bullets = len(BULLET_LINE_PATTERN.findall(text))
    numbered = len(NUMBERED_LINE_PATTERN.findall(text))
    return len(paragraphs) > 1 or bullets > 1 or numbered > 1


def detect_star_flags(text: str) -> StarFlags:
    return StarFlags(**{name: bool(pattern.search(text)) for name, pattern in STAR_PATTERNS.items()})


def analyze_code_quality(text: str) -> CodeQuality | None:
    has_code = bool(CODE_MARKER_PATTERN.search(text) or CODE_KEYWORD_PATTERN.search(text))
    if not has_code:
        return None
    return CodeQuality(
        hasCode=True,
        hasComments=bool(COMMENT_PATTERN.search(text)),
        hasVariableNames=bool(ASSIGNMENT_PATTERN.search(text)),
        hasErrorHandling=bool(ERROR_HANDLING_PATTERN.search(text)),
    )


def analyze_complexity(text: str, word_count: int | None = None) -> Complexity:
    if word_count is None:
        word_count = len(text.split())
    sentences = max(1, len([part for part in SENTENCE_SPLIT_PATTERN.split(text) if part.strip()]))
    avg_words = word_count / sentences
    if avg_words > 20:
        level = "high"
    elif avg_words > 12:
        level = "medium"
    else:
        level = "low"
    return Complexity(sentences=sentences, avgWordsPerSentence=round(avg_words, 2), level=level)


def analyze_sentiment(text: str) -> Sentiment:
    positive = len(POSITIVE_PATTERN.findall(text))
    negative = len(NEGATIVE_PATTERN.findall(text))
    if positive > negative:
        overall = "positive"
    elif negative > positive:
        overall = "negative"
    else:
        overall = "neutral"
    return Sentiment(positiveHits=positive, negativeHits=negative, overall=overall)
