import random

from interview_sim.models.evaluation import StarFlags, TextAnalysis
from interview_sim.scoring.score_calculator import compute_total_score

MAX_IMPROVEMENTS = 3
MAX_RESOURCES = 4

FEEDBACK_TEMPLATES: dict[str, list[str]] = {
    "excellent": [
        "Outstanding response! Your answer demonstrates exceptional understanding and communication skills.",
        "Excellent work! You've shown deep knowledge and structured your response very effectively.",
        "Impressive answer! Your technical depth and clarity are exactly what interviewers look for.",
    ],
    "good": [
        "Good solid answer! You demonstrate strong understanding with room for minor improvements.",
        "Well-structured response showing good competence in the subject matter.",
        "Nice work! Your answer shows good technical knowledge and communication skills.",
    ],
    "decent": [
        "Decent response that addresses the key points. Consider adding more depth and examples.",
        "Your answer shows understanding but could benefit from more structure and detail.",
        "Good foundation, but expanding on your points would strengthen your response.",
    ],
    "needs_improvement": [
        "Your answer needs more development. Focus on providing comprehensive details and clear structure.",
        "Consider expanding your response with more specific examples and deeper analysis.",
        "Work on structuring your answer more clearly and providing additional supporting details.",
    ],
}

BASE_RESOURCES: dict[str, list[str]] = {
    "Technical": [
        "LeetCode for algorithm practice",
        "System Design Interview by Alex Xu",
        "Cracking the Coding Interview by Gayle McDowell",
    ],
    "Behavioral": [
        "The STAR Method for Behavioral Interviews",
        "Behavioral Interview Questions Database",
        "Leadership and Communication Skills Development",
    ],
}

ADVANCED_RESOURCES: dict[str, list[str]] = {
    "Technical": [
        "Design Patterns: Elements of Reusable Object-Oriented Software",
        "High-Performance Computing resources",
    ],
    "Behavioral": [
        "Executive Leadership Development Programs",
        "Conflict Resolution and Team Management",
    ],
}


def generate_feedback_payload(
    breakdown: dict[str, float],
    analysis: TextAnalysis,
    mode: str,
    difficulty: str,
) -> dict:
    total_score = compute_total_score(breakdown)
    return {
        "summary": generate_summary_feedback(total_score),
        "improvements": generate_improvements(breakdown, analysis, mode),
        "resources": generate_resources(mode, difficulty, total_score),
    }


def score_band(score: float) -> str:
    if score >= 8.5:
        return "excellent"
    if score >= 7.0:
        return "good"
    if score >= 5.5:
        return "decent"
    return "needs_improvement"


def generate_summary_feedback(score: float) -> str:
    return random.choice(FEEDBACK_TEMPLATES[score_band(score)])


def generate_improvements(breakdown: dict[str, float], analysis: TextAnalysis, mode: str) -> list[str]:
    improvements: list[str] = []

    if analysis.wordCount < 50:
        improvements.append("Provide more detailed explanations and elaborate on your key points")
    if not analysis.hasStructure:
        improvements.append(
            "Structure your response with clear paragraphs or bullet points for better readability"
        )
    if not analysis.hasExamples:
        improvements.append("Include specific examples to illustrate your points and make them more concrete")

    if mode == "Technical":
        if not analysis.hasTechnicalTerms:
            improvements.append("Use more technical terminology to demonstrate your expertise")
        if breakdown.get("efficiency", 0.0) < 1.5:
            improvements.append("Discuss time and space complexity to show algorithmic thinking")
        if analysis.codeQuality is not None and not analysis.codeQuality.hasComments:
            improvements.append("Add comments to your code examples for better clarity")
    else:
        star = analysis.starFlags or StarFlags()
        if not star.situation:
            improvements.append("Start with a clear description of the situation or context")
        if not star.action:
            improvements.append("Focus more on the specific actions you took to address the situation")
        if not star.result:
            improvements.append("Include the outcomes and results of your actions")
        if not analysis.hasQuantification:
            improvements.append("Quantify your impact with specific metrics and numbers where possible")

    return improvements[:MAX_IMPROVEMENTS]


def generate_resources(mode: str, difficulty: str, score: float) -> list[str]:
    resources = list(BASE_RESOURCES.get(mode, BASE_RESOURCES["Technical"]))

    if difficulty == "Hard" or score < 6:
        resources.extend(ADVANCED_RESOURCES.get(mode, ADVANCED_RESOURCES["Technical"]))

    if score < 5:
        resources.insert(0, "Fundamental concepts review materials")
        resources.append("Practice interview platforms (Pramp, InterviewBuddy)")

    return resources[:MAX_RESOURCES]
