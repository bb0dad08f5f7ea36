"""Data models for ZAP alerts and scan settings."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any


def _normalize_label(value: object) -> str:
    text = "" if value is None else str(value)
    return text.strip().lower().replace(" ", "").replace("_", "")


class Risk(IntEnum):
    """Alert risk level, ordered from least to most severe."""

    INFORMATIONAL = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: object) -> "Risk":
        """Parse a ZAP risk label ("High") or risk code ("3")."""
        text = _normalize_label(value)
        if text.isdigit() and int(text) in cls._value2member_map_:
            return cls(int(text))
        for member in cls:
            if member.name.lower() == text:
                return member
        if text == "info":
            return cls.INFORMATIONAL
        raise ValueError(f"Unknown risk level: {value!r}")


class Confidence(IntEnum):
    """Alert confidence level as reported by ZAP."""

    FALSE_POSITIVE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CONFIRMED = 4

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    @classmethod
    def parse(cls, value: object) -> "Confidence":
        """Parse a ZAP confidence label ("False Positive") or code ("0")."""
        text = _normalize_label(value)
        if text.isdigit() and int(text) in cls._value2member_map_:
            return cls(int(text))
        for member in cls:
            if member.name.lower().replace("_", "") == text:
                return member
        raise ValueError(f"Unknown confidence level: {value!r}")


def _to_int(value: object, default: int = -1) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Alert:
    """A finding reported by ZAP for one URL."""

    risk: Risk
    confidence: Confidence
    name: str
    description: str = ""
    url: str = ""
    evidence: str = ""
    attack: str = ""
    param: str = ""
    solution: str = ""
    reference: str = ""
    other: str = ""
    method: str = ""
    cwe_id: int = -1
    wasc_id: int = -1
    plugin_id: str = ""
    alert_id: str = ""
    message_id: str = ""

    @property
    def details(self) -> str:
        """First non-blank of evidence and attack, falling back to the parameter."""
        for value in (self.evidence, self.attack):
            if value and value.strip():
                return value
        return self.param

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Alert":
        """Build an alert from one entry of ZAP's ``core/view/alerts`` payload."""
        risk = data.get("risk")
        if risk in (None, ""):
            risk = data.get("riskcode", "0")
        confidence = data.get("confidence")
        if confidence in (None, ""):
            confidence = data.get("confidencecode", "2")
        return cls(
            risk=Risk.parse(risk),
            confidence=Confidence.parse(confidence),
            name=str(data.get("alert") or data.get("name") or "").strip(),
            description=str(data.get("description") or data.get("desc") or ""),
            url=str(data.get("url") or ""),
            evidence=str(data.get("evidence") or ""),
            attack=str(data.get("attack") or ""),
            param=str(data.get("param") or ""),
            solution=str(data.get("solution") or ""),
            reference=str(data.get("reference") or ""),
            other=str(data.get("other") or ""),
            method=str(data.get("method") or ""),
            cwe_id=_to_int(data.get("cweid")),
            wasc_id=_to_int(data.get("wascid")),
            plugin_id=str(data.get("pluginId") or ""),
            alert_id=str(data.get("id") or ""),
            message_id=str(data.get("messageId") or ""),
        )


@dataclass
class ScanSettings:
    """Per-orchestrator names, poll intervals and wait limits."""

    session_name: str = "securitytester"
    context_name: str = "securitytester"
    spider_poll_interval: float = 0.05
    scan_poll_interval: float = 0.1
    spider_settle_delay: float = 1.5
    alert_poll_interval: float = 1.0
    alert_max_checks: int = 10
