from interview_sim.models.evaluation import Evaluation
from interview_sim.models.session import SessionConfig
from interview_sim.models.summary import RecommendationSet
from interview_sim.scoring.feedback_generator import generate_resources


def generate_recommendations(
    evaluations: list[Evaluation],
    average_score: float,
    config: SessionConfig,
) -> RecommendationSet:
    recommendations = RecommendationSet()

    if average_score < 6:
        recommendations.immediate.extend(
            [
                "Focus on understanding fundamental concepts before advanced topics",
                "Practice structuring your responses with clear beginning, middle, and end",
            ]
        )
    elif average_score < 8:
        recommendations.immediate.extend(
            [
                "Work on providing more comprehensive and detailed answers",
                "Include specific examples to support your points",
            ]
        )

    if config.mode == "Technical":
        recommendations.shortTerm.extend(
            [
                "Practice coding problems daily for 30-45 minutes",
                "Study system design principles and common patterns",
            ]
        )
        if config.difficulty == "Hard":
            recommendations.shortTerm.append("Focus on scalability and performance optimization topics")
    else:
        recommendations.shortTerm.extend(
            [
                "Practice the STAR method with various scenarios",
                "Prepare quantified examples of your achievements",
            ]
        )

    recommendations.longTerm.extend(
        [
            f"Deepen expertise in {config.role} domain knowledge",
            "Develop leadership and mentoring skills",
            "Build a portfolio of challenging projects",
        ]
    )

    if average_score < 5:
        recommendations.resources.extend(
            [
                "Fundamental computer science concepts review",
                "Basic interview preparation courses",
            ]
        )
    recommendations.resources.extend(generate_resources(config.mode, config.difficulty, average_score))

    return recommendations
