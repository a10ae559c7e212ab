"""
Rubric builder.

Every category evaluator collects its checks into a Rubric and finishes
with Rubric.score(weight). Points are fixed per check, so a category score
is always round_half_up(100 × earned / available).
"""

from typing import List, Optional

from models.enums import FindingStatus
from models.schemas import CategoryScore, Finding
from utils.rounding import grade_for, score_from_points


class Rubric:
    """
    Accumulates findings and recommendation strings for one category.

    Example:
        rubric = Rubric()
        rubric.binary("Canonical URL", has_canonical, "Canonical tag found", 10)
        if not has_canonical:
            rubric.recommend("Add a canonical URL tag.")
        return rubric.score(weight)
    """

    def __init__(self):
        self.findings: List[Finding] = []
        self.recommendations: List[str] = []

    def add(
        self,
        check: str,
        status: FindingStatus,
        details: str,
        points: int,
        max_points: int,
    ) -> Finding:
        finding = Finding(
            check=check,
            status=status,
            details=details,
            points=points,
            max_points=max_points,
        )
        self.findings.append(finding)
        return finding

    def binary(
        self,
        check: str,
        ok: bool,
        details: str,
        max_points: int,
        miss_points: int = 0,
        miss_details: Optional[str] = None,
    ) -> bool:
        """
        All-or-nothing check.

        A miss that still earns points is reported as partial.
        Returns ok so callers can chain a recommendation.
        """
        if ok:
            self.add(check, FindingStatus.PASS, details, max_points, max_points)
        else:
            status = FindingStatus.PARTIAL if miss_points > 0 else FindingStatus.FAIL
            self.add(check, status, miss_details or details, miss_points, max_points)
        return ok

    def tiered(
        self,
        check: str,
        value: float,
        details: str,
        max_points: int,
        pass_at: float,
        partial_at: Optional[float] = None,
        partial_points: int = 0,
        floor: int = 0,
    ) -> bool:
        """
        Threshold check: value >= pass_at passes, value >= partial_at is partial.

        Anything below both earns floor points with status fail.
        Returns True only on a full pass.
        """
        if value >= pass_at:
            self.add(check, FindingStatus.PASS, details, max_points, max_points)
            return True
        if partial_at is not None and value >= partial_at:
            self.add(check, FindingStatus.PARTIAL, details, partial_points, max_points)
        else:
            self.add(check, FindingStatus.FAIL, details, floor, max_points)
        return False

    def recommend(self, text: str) -> None:
        self.recommendations.append(text)

    def score(self, weight: float) -> CategoryScore:
        earned = sum(f.points for f in self.findings)
        available = sum(f.max_points for f in self.findings)
        score = score_from_points(earned, available)
        return CategoryScore(
            score=score,
            grade=grade_for(score),
            weight=weight,
            findings=list(self.findings),
            recommendations=list(self.recommendations),
        )
