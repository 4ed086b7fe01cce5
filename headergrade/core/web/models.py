from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any


class Category(Enum):
    """Header categories. Only the first three are scored."""

    SECURITY = "security"
    PERFORMANCE = "performance"
    MAINTAINABILITY = "maintainability"
    CLOUDFLARE = "cloudflare"

    @property
    def label(self) -> str:
        return self.value.capitalize()


SCORED_CATEGORIES: tuple[Category, ...] = (
    Category.SECURITY,
    Category.PERFORMANCE,
    Category.MAINTAINABILITY,
)


class Importance(Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    RECOMMENDED = "recommended"
    OPTIONAL = "optional"


class HeaderStatus(Enum):
    MISSING = "missing"
    IMPLEMENTED = "implemented"
    WARNING = "warning"


@dataclass(frozen=True)
class HeaderRule:
    """Catalog entry describing one response header to look for."""

    name: str
    key: str
    importance: Importance
    description: str
    link: str
    category: Category
    recommendation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "key": self.key,
            "importance": self.importance.value,
            "description": self.description,
            "recommendation": self.recommendation,
            "link": self.link,
            "category": self.category.value,
        }


@dataclass(frozen=True)
class EvaluatedHeader:
    """Outcome of checking one rule against a response header snapshot."""

    name: str
    key: str
    importance: Importance
    description: str
    link: str
    category: Category
    implemented: bool
    value: str | None
    status: HeaderStatus
    recommendation: str | None = None

    @classmethod
    def from_rule(
        cls,
        rule: HeaderRule,
        value: str | None,
        status: HeaderStatus,
        recommendation: str | None = None,
    ) -> "EvaluatedHeader":
        return cls(
            name=rule.name,
            key=rule.key,
            importance=rule.importance,
            description=rule.description,
            link=rule.link,
            category=rule.category,
            implemented=status is not HeaderStatus.MISSING,
            value=value,
            status=status,
            recommendation=(
                recommendation if recommendation is not None else rule.recommendation
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "key": self.key,
            "implemented": self.implemented,
            "value": self.value,
            "status": self.status.value,
            "importance": self.importance.value,
            "description": self.description,
            "recommendation": self.recommendation,
            "link": self.link,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EvaluatedHeader":
        return cls(
            name=data["name"],
            key=data["key"],
            importance=Importance(data["importance"]),
            description=data["description"],
            link=data["link"],
            category=Category(data["category"]),
            implemented=bool(data["implemented"]),
            value=data.get("value"),
            status=HeaderStatus(data["status"]),
            recommendation=data.get("recommendation"),
        )


@dataclass(frozen=True)
class CategoryResult:
    category: Category
    score: int
    total: int
    implemented: int
    details: tuple[EvaluatedHeader, ...]

    def __post_init__(self):
        if not 0 <= self.implemented <= self.total:
            raise ValueError(
                f"implemented count {self.implemented} outside 0..{self.total}"
            )

    def missing(self, importance: Importance | None = None) -> list[EvaluatedHeader]:
        """Headers of this category that were not found, optionally filtered by importance."""
        return [
            header
            for header in self.details
            if not header.implemented
            and (importance is None or header.importance is importance)
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category.value,
            "score": self.score,
            "total": self.total,
            "implemented": self.implemented,
            "details": [header.to_dict() for header in self.details],
        }


@dataclass(frozen=True)
class CloudflareResult:
    """Informational Cloudflare indicator result. Never contributes to any score."""

    is_using_cloudflare: bool
    total: int
    implemented: int
    details: tuple[EvaluatedHeader, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "isUsingCloudflare": self.is_using_cloudflare,
            "total": self.total,
            "implemented": self.implemented,
            "details": [header.to_dict() for header in self.details],
        }


@dataclass(frozen=True)
class AggregateResult:
    overall_score: int
    overall_grade: str
    summary: str


@dataclass(frozen=True)
class ScanRecord:
    """Persisted snapshot of one analysis request."""

    url: str
    raw_headers: dict[str, str]
    security_score: int
    performance_score: int
    maintainability_score: int
    overall_score: int
    total_security_headers: int
    implemented_security_headers: int
    total_performance_headers: int
    implemented_performance_headers: int
    total_maintainability_headers: int
    implemented_maintainability_headers: int
    security_grade: str
    performance_grade: str
    maintainability_grade: str
    overall_grade: str
    id: int | None = None
    timestamp: datetime | None = None

    def with_identity(self, record_id: int, timestamp: datetime) -> "ScanRecord":
        return replace(self, id=record_id, timestamp=timestamp)

    def category_fields(self, category: Category) -> "CategoryFields":
        """Return the flattened score/count/grade fields for one scored category."""
        try:
            accessor = CATEGORY_FIELDS[category]
        except KeyError:
            raise ValueError(f"{category.value} is not a scored category") from None
        return CategoryFields(
            score=getattr(self, accessor.score),
            total=getattr(self, accessor.total),
            implemented=getattr(self, accessor.implemented),
            grade=getattr(self, accessor.grade),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "url": self.url,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "rawHeaders": dict(self.raw_headers),
            "securityScore": self.security_score,
            "performanceScore": self.performance_score,
            "maintainabilityScore": self.maintainability_score,
            "overallScore": self.overall_score,
            "totalSecurityHeaders": self.total_security_headers,
            "implementedSecurityHeaders": self.implemented_security_headers,
            "totalPerformanceHeaders": self.total_performance_headers,
            "implementedPerformanceHeaders": self.implemented_performance_headers,
            "totalMaintainabilityHeaders": self.total_maintainability_headers,
            "implementedMaintainabilityHeaders": self.implemented_maintainability_headers,
            "securityGrade": self.security_grade,
            "performanceGrade": self.performance_grade,
            "maintainabilityGrade": self.maintainability_grade,
            "overallGrade": self.overall_grade,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScanRecord":
        timestamp = data.get("timestamp")
        return cls(
            id=data.get("id"),
            url=data["url"],
            timestamp=datetime.fromisoformat(timestamp) if timestamp else None,
            raw_headers=dict(data.get("rawHeaders", {})),
            security_score=data["securityScore"],
            performance_score=data["performanceScore"],
            maintainability_score=data["maintainabilityScore"],
            overall_score=data["overallScore"],
            total_security_headers=data["totalSecurityHeaders"],
            implemented_security_headers=data["implementedSecurityHeaders"],
            total_performance_headers=data["totalPerformanceHeaders"],
            implemented_performance_headers=data["implementedPerformanceHeaders"],
            total_maintainability_headers=data["totalMaintainabilityHeaders"],
            implemented_maintainability_headers=data[
                "implementedMaintainabilityHeaders"
            ],
            security_grade=data["securityGrade"],
            performance_grade=data["performanceGrade"],
            maintainability_grade=data["maintainabilityGrade"],
            overall_grade=data["overallGrade"],
        )


@dataclass(frozen=True)
class CategoryFields:
    score: int
    total: int
    implemented: int
    grade: str


@dataclass(frozen=True)
class _FieldNames:
    score: str
    total: str
    implemented: str
    grade: str


CATEGORY_FIELDS: dict[Category, _FieldNames] = {
    category: _FieldNames(
        score=f"{category.value}_score",
        total=f"total_{category.value}_headers",
        implemented=f"implemented_{category.value}_headers",
        grade=f"{category.value}_grade",
    )
    for category in SCORED_CATEGORIES
}


@dataclass(frozen=True)
class ServerTimingEntry:
    name: str
    duration: float
    description: str
    share: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "duration": self.duration,
            "description": self.description,
            "share": self.share,
        }


@dataclass(frozen=True)
class ProtocolInfo:
    """Best-effort HTTP protocol version lookup. Informational, never scored."""

    protocol: str
    details: str

    def to_dict(self) -> dict[str, Any]:
        return {"protocol": self.protocol, "details": self.details}


@dataclass(frozen=True)
class AnalysisResult:
    """Everything produced by one analysis request."""

    scan: ScanRecord
    categories: dict[Category, CategoryResult]
    cloudflare: CloudflareResult
    summary: str
    fine_grade: str
    server_timing: tuple[ServerTimingEntry, ...] = field(default_factory=tuple)
    protocol: ProtocolInfo | None = None

    def category(self, category: Category) -> CategoryResult:
        return self.categories[category]

    def to_dict(self) -> dict[str, Any]:
        return {
            "scan": self.scan.to_dict(),
            "securityHeaders": [
                h.to_dict() for h in self.categories[Category.SECURITY].details
            ],
            "performanceHeaders": [
                h.to_dict() for h in self.categories[Category.PERFORMANCE].details
            ],
            "maintainabilityHeaders": [
                h.to_dict() for h in self.categories[Category.MAINTAINABILITY].details
            ],
            "cloudflareHeaders": [h.to_dict() for h in self.cloudflare.details],
            "isUsingCloudflare": self.cloudflare.is_using_cloudflare,
            "summary": self.summary,
            "overallFineGrade": self.fine_grade,
            "serverTiming": [entry.to_dict() for entry in self.server_timing],
            "protocol": self.protocol.to_dict() if self.protocol else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        """Rebuild an analysis from its to_dict() form (used for cached results)."""
        scan = ScanRecord.from_dict(data["scan"])
        categories = {}
        for category in SCORED_CATEGORIES:
            fields = scan.category_fields(category)
            categories[category] = CategoryResult(
                category=category,
                score=fields.score,
                total=fields.total,
                implemented=fields.implemented,
                details=tuple(
                    EvaluatedHeader.from_dict(h)
                    for h in data[f"{category.value}Headers"]
                ),
            )
        cloudflare_details = tuple(
            EvaluatedHeader.from_dict(h) for h in data.get("cloudflareHeaders", [])
        )
        protocol = data.get("protocol")
        return cls(
            scan=scan,
            categories=categories,
            cloudflare=CloudflareResult(
                is_using_cloudflare=bool(data.get("isUsingCloudflare")),
                total=len(cloudflare_details),
                implemented=sum(1 for h in cloudflare_details if h.implemented),
                details=cloudflare_details,
            ),
            summary=data.get("summary", ""),
            fine_grade=data.get("overallFineGrade", ""),
            server_timing=tuple(
                ServerTimingEntry(**entry) for entry in data.get("serverTiming", [])
            ),
            protocol=ProtocolInfo(**protocol) if protocol else None,
        )
