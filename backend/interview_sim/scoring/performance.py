import statistics

from interview_sim.models.evaluation import Evaluation
from interview_sim.models.summary import PerformanceAnalysis

SKIP_SCORE_CEILING = 2.0
TREND_MARGIN = 0.5
HIGH_SCORE = 7.5
LOW_SCORE = 5.5


def analyze_performance(evaluations: list[Evaluation]) -> PerformanceAnalysis:
    """Trend, consistency, strengths and weaknesses across a session's evaluations."""
    attempted = [item for item in evaluations if not item.skipped]
    valid_scores = [item.score for item in attempted if item.score > SKIP_SCORE_CEILING]

    if not valid_scores:
        return _analyze_without_valid_scores(evaluations, attempted)

    mean = statistics.fmean(valid_scores)
    std_dev = statistics.pstdev(valid_scores)

    if std_dev < 1:
        consistency = "high"
    elif std_dev < 2:
        consistency = "moderate"
    else:
        consistency = "low"

    strengths = _collect_strengths(evaluations, attempted)
    weaknesses: list[str] = []

    low_count = sum(1 for item in evaluations if item.score < LOW_SCORE)
    if low_count >= len(evaluations) * 0.4:
        weaknesses.append("Needs improvement in answer depth and detail")
    if len(attempted) < len(evaluations):
        weaknesses.append("Some questions skipped - work on building confidence")

    if not strengths and attempted:
        strengths.append("Completed the interview process")

    return PerformanceAnalysis(
        trend=score_trend(valid_scores),
        consistency=consistency,
        strengths=strengths,
        weaknesses=weaknesses,
        averageScore=mean,
        standardDeviation=std_dev,
    )


def score_trend(scores: list[float]) -> str:
    """Compare first and second half means; the second half takes the odd element."""
    if len(scores) < 2:
        return "consistent"
    midpoint = len(scores) // 2
    first_avg = statistics.fmean(scores[:midpoint])
    second_avg = statistics.fmean(scores[midpoint:])
    if second_avg > first_avg + TREND_MARGIN:
        return "improving"
    if first_avg > second_avg + TREND_MARGIN:
        return "declining"
    return "consistent"


def _analyze_without_valid_scores(evaluations: list[Evaluation], attempted: list[Evaluation]) -> PerformanceAnalysis:
    skipped_count = len(evaluations) - len(attempted)
    strengths: list[str] = []
    if attempted:
        strengths.append("Showed willingness to attempt questions")
    if any(len(item.candidateAnswer) > 20 for item in attempted):
        strengths.append("Provided detailed responses when attempting questions")

    return PerformanceAnalysis(
        trend="all_skipped" if skipped_count == len(evaluations) else "incomplete",
        consistency="no_attempts" if not attempted else "mixed_attempts",
        strengths=strengths,
        weaknesses=["Multiple questions skipped"],
        averageScore=0.0,
    )


def _collect_strengths(evaluations: list[Evaluation], attempted: list[Evaluation]) -> list[str]:
    strengths: list[str] = []

    high_count = sum(1 for item in evaluations if item.score >= HIGH_SCORE)
    if high_count >= len(evaluations) * 0.6:
        strengths.append("Consistently strong performance across questions")
    if any(item.analysis.get("hasStructure") for item in evaluations):
        strengths.append("Good answer structure and organization")
    if any(item.analysis.get("hasExamples") for item in evaluations):
        strengths.append("Effective use of examples and illustrations")

    if attempted:
        avg_length = statistics.fmean(len(item.candidateAnswer) for item in attempted)
        if avg_length > 50:
            strengths.append("Provided comprehensive and detailed answers")
        if any("example" in item.candidateAnswer.lower() for item in attempted):
            strengths.append("Used examples to illustrate points")
        if any("because" in item.candidateAnswer.lower() for item in attempted):
            strengths.append("Demonstrated reasoning and explanation skills")

    return strengths
