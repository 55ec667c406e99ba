from interview_sim.analysis.text_features import analyze_answer

__all__ = [
    "analyze_answer",
]
