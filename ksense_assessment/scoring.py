import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional

from .rules import (
    HIGH_RISK_THRESHOLD,
    RiskComponent,
    is_fever,
    score_age,
    score_bp,
    score_temp,
    total_score,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatientAssessment:
    patient_id: str
    bp: RiskComponent
    temp: RiskComponent
    age: RiskComponent
    total_score: int
    is_fever: bool

    @property
    def is_high_risk(self):
        return self.total_score >= HIGH_RISK_THRESHOLD

    @property
    def has_data_issue(self):
        return self.bp.invalid or self.temp.invalid or self.age.invalid


@dataclass
class AssessmentResult:
    high_risk_patients: List[str] = field(default_factory=list)
    fever_patients: List[str] = field(default_factory=list)
    data_quality_issues: List[str] = field(default_factory=list)

    def add(self, assessment: PatientAssessment):
        pid = assessment.patient_id
        if assessment.is_high_risk:
            self.high_risk_patients.append(pid)
        if assessment.is_fever:
            self.fever_patients.append(pid)
        if assessment.has_data_issue:
            self.data_quality_issues.append(pid)

    def counts(self):
        return {k: len(v) for k, v in self.to_payload().items()}

    def to_payload(self):
        return {
            "high_risk_patients": list(self.high_risk_patients),
            "fever_patients": list(self.fever_patients),
            "data_quality_issues": list(self.data_quality_issues),
        }


def assess_patient(patient: Mapping) -> Optional[PatientAssessment]:
    """Score one raw record. Returns None for records without a patient_id."""
    if not isinstance(patient, Mapping):
        return None
    pid = patient.get("patient_id")
    if not pid:
        return None

    temp = patient.get("temperature")
    bp = score_bp(patient.get("blood_pressure"))
    temp_risk = score_temp(temp)
    age = score_age(patient.get("age"))

    return PatientAssessment(
        patient_id=pid,
        bp=bp,
        temp=temp_risk,
        age=age,
        total_score=total_score(bp, temp_risk, age),
        is_fever=is_fever(temp),
    )


def analyze(patients: Iterable[Mapping]) -> AssessmentResult:
    result = AssessmentResult()
    skipped = 0
    for p in patients:
        assessment = assess_patient(p)
        if assessment is None:
            skipped += 1
            continue
        result.add(assessment)
    if skipped:
        logger.debug("Skipped %d records without a patient_id", skipped)
    return result
