import math

from interview_sim.models.evaluation import StarFlags, TextAnalysis
from interview_sim.scoring.rubric import BehavioralRubric, Rubric, TechnicalRubric

DIFFICULTY_MULTIPLIERS: dict[str, float] = {"Easy": 0.8, "Medium": 1.0, "Hard": 1.2}


def compute_breakdown(analysis: TextAnalysis, rubric: Rubric, difficulty: str) -> dict[str, float]:
    """Score every rubric criterion, scale by difficulty and clamp to the criterion maximum."""
    multiplier = DIFFICULTY_MULTIPLIERS.get(difficulty, 1.0)
    if isinstance(rubric, TechnicalRubric):
        raw_scores = {
            "correctness": score_correctness(analysis, rubric.correctness.max_score),
            "efficiency": score_efficiency(analysis, rubric.efficiency.max_score),
            "completeness": score_completeness(analysis, rubric.completeness.max_score),
            "clarity": score_clarity(analysis, rubric.clarity.max_score),
        }
    elif isinstance(rubric, BehavioralRubric):
        raw_scores = {
            "situation": score_situation(analysis, rubric.situation.max_score),
            "actions": score_actions(analysis, rubric.actions.max_score),
            "results": score_results(analysis, rubric.results.max_score),
            "reflection": score_reflection(analysis, rubric.reflection.max_score),
        }
    else:
        raise TypeError(f"Unsupported rubric: {type(rubric).__name__}")

    breakdown: dict[str, float] = {}
    for name, criterion in rubric.criteria.items():
        breakdown[name] = _clamp(raw_scores[name] * multiplier, 0.0, criterion.max_score)
    return breakdown


def compute_total_score(breakdown: dict[str, float]) -> float:
    return round_score(sum(breakdown.values()))


def round_score(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(float(value) * 10.0 + 0.5) / 10.0


def score_correctness(analysis: TextAnalysis, max_score: float) -> float:
    score = 1.0
    if analysis.wordCount > 50:
        score += 1.0
    if analysis.hasTechnicalTerms:
        score += 1.0
    if analysis.hasExamples:
        score += 0.5
    if _has_code(analysis):
        score += 1.0
    if analysis.hasComplexityAnalysis:
        score += 0.5
    return min(max_score, score)


def score_efficiency(analysis: TextAnalysis, max_score: float) -> float:
    score = 0.5
    if analysis.hasComplexityAnalysis:
        score += 1.0
    if _has_code(analysis):
        score += 0.5
    if analysis.hasStructure:
        score += 0.5
    if 30 < analysis.wordCount < 300:
        score += 0.5
    if analysis.complexity.level == "medium":
        score += 0.5
    return min(max_score, score)


def score_completeness(analysis: TextAnalysis, max_score: float) -> float:
    score = 0.5
    if analysis.wordCount > 100:
        score += 0.5
    if analysis.hasExamples:
        score += 0.5
    if analysis.hasTechnicalTerms:
        score += 0.5
    return min(max_score, score)


def score_clarity(analysis: TextAnalysis, max_score: float) -> float:
    score = 0.5
    if analysis.hasStructure:
        score += 0.5
    if analysis.complexity.avgWordsPerSentence < 25:
        score += 0.5
    if analysis.wordCount > 30:
        score += 0.5
    return min(max_score, score)


def score_situation(analysis: TextAnalysis, max_score: float) -> float:
    star = _star(analysis)
    score = 0.5
    if star.situation:
        score += 1.0
    if star.task:
        score += 0.5
    return min(max_score, score)


def score_actions(analysis: TextAnalysis, max_score: float) -> float:
    star = _star(analysis)
    score = 1.0
    if star.action:
        score += 1.5
    if analysis.wordCount > 80:
        score += 1.0
    if analysis.hasExamples:
        score += 0.5
    return min(max_score, score)


def score_results(analysis: TextAnalysis, max_score: float) -> float:
    star = _star(analysis)
    score = 0.5
    if star.result:
        score += 1.0
    if analysis.hasQuantification:
        score += 0.5
    return min(max_score, score)


def score_reflection(analysis: TextAnalysis, max_score: float) -> float:
    score = 0.5
    if analysis.hasReflection:
        score += 1.0
    if analysis.sentiment.overall == "positive":
        score += 0.5
    return min(max_score, score)


def _has_code(analysis: TextAnalysis) -> bool:
    return analysis.codeQuality is not None and analysis.codeQuality.hasCode


def _star(analysis: TextAnalysis) -> StarFlags:
    return analysis.starFlags or StarFlags()


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, float(value)))
