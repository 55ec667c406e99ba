from dataclasses import dataclass


@dataclass(frozen=True)
class RubricCriterion:
    max_score: float
    weight: float
    description: str


@dataclass(frozen=True)
class TechnicalRubric:
    correctness: RubricCriterion
    efficiency: RubricCriterion
    completeness: RubricCriterion
    clarity: RubricCriterion

    @property
    def criteria(self) -> dict[str, RubricCriterion]:
        return {
            "correctness": self.correctness,
            "efficiency": self.efficiency,
            "completeness": self.completeness,
            "clarity": self.clarity,
        }


@dataclass(frozen=True)
class BehavioralRubric:
    situation: RubricCriterion
    actions: RubricCriterion
    results: RubricCriterion
    reflection: RubricCriterion

    @property
    def criteria(self) -> dict[str, RubricCriterion]:
        return {
            "situation": self.situation,
            "actions": self.actions,
            "results": self.results,
            "reflection": self.reflection,
        }


Rubric = TechnicalRubric | BehavioralRubric

TECHNICAL_RUBRIC = TechnicalRubric(
    correctness=RubricCriterion(
        max_score=4.0,
        weight=0.4,
        description="Technical accuracy and correctness of solution",
    ),
    efficiency=RubricCriterion(
        max_score=2.0,
        weight=0.2,
        description="Time/space complexity and optimization",
    ),
    completeness=RubricCriterion(
        max_score=2.0,
        weight=0.2,
        description="Coverage of all requirements and edge cases",
    ),
    clarity=RubricCriterion(
        max_score=2.0,
        weight=0.2,
        description="Code readability and explanation quality",
    ),
)

BEHAVIORAL_RUBRIC = BehavioralRubric(
    situation=RubricCriterion(
        max_score=2.0,
        weight=0.2,
        description="Context and background setup",
    ),
    actions=RubricCriterion(
        max_score=4.0,
        weight=0.4,
        description="Specific actions taken and decision-making",
    ),
    results=RubricCriterion(
        max_score=2.0,
        weight=0.2,
        description="Outcomes and measurable impact",
    ),
    reflection=RubricCriterion(
        max_score=2.0,
        weight=0.2,
        description="Lessons learned and future improvements",
    ),
)


def rubric_for_mode(mode: str) -> Rubric:
    if mode == "Technical":
        return TECHNICAL_RUBRIC
    if mode == "Behavioral":
        return BEHAVIORAL_RUBRIC
    raise ValueError(f"Unknown interview mode: {mode}")


def rubric_max_total(rubric: Rubric) -> float:
    return sum(criterion.max_score for criterion in rubric.criteria.values())
