"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any
from uuid import uuid4
import json

from distro_ready.application.payout_service import DistributeRevenue
from distro_ready.application.readiness_service import EvaluateDistributionReadiness, ReleaseReadiness
from distro_ready.catalog import load_catalog
from distro_ready.domain.models import AudioQualityReport, CoverArtReport
from distro_ready.infrastructure.logging_event_publisher import LoggingEventPublisher
from distro_ready.interfaces.payloads import AudioPayload, CoverArtPayload, ReleasePayload, SplitsPayload
from distro_ready.readiness_options import RevenueEventType

_event_publisher = LoggingEventPublisher()
payout_service = DistributeRevenue(event_publisher=_event_publisher)


def build_readiness_service(catalog_path: Path | None = None) -> EvaluateDistributionReadiness:
    return EvaluateDistributionReadiness(catalog=load_catalog(catalog_path), event_publisher=_event_publisher)


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ValueError(f"Input file is unreadable: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Input file is not valid JSON: {path} ({exc.msg})") from exc


def write_report_json(report_json: Path, payload: Any) -> Path:
    report_json.parent.mkdir(parents=True, exist_ok=True)
    report_json.write_text(json.dumps(payload, indent=2))
    return report_json


def classify_audio_from_path(
    input_path: Path,
    catalog_path: Path | None = None,
    correlation_id: str | None = None,
) -> AudioQualityReport:
    payload = AudioPayload.model_validate(_read_json(input_path))
    profile, loudness = payload.to_domain()
    return build_readiness_service(catalog_path).classify_audio(profile, loudness, correlation_id=correlation_id)


def evaluate_cover_art_from_path(
    input_path: Path,
    catalog_path: Path | None = None,
    correlation_id: str | None = None,
) -> CoverArtReport:
    raw = _read_json(input_path)
    measurement = None if raw is None else CoverArtPayload.model_validate(raw).to_measurement()
    return build_readiness_service(catalog_path).evaluate_cover_art(measurement, correlation_id=correlation_id)


def score_release_from_path(
    input_path: Path,
    catalog_path: Path | None = None,
    correlation_id: str | None = None,
) -> ReleaseReadiness:
    payload = ReleasePayload.model_validate(_read_json(input_path))
    return build_readiness_service(catalog_path).evaluate_release(
        technical_profile=payload.technicalProfile.to_profile() if payload.technicalProfile else None,
        loudness=payload.loudness.to_measurement() if payload.loudness else None,
        cover_art=payload.coverArt.to_measurement() if payload.coverArt else None,
        correlation_id=correlation_id,
        include_audio=payload.has_audio,
        include_cover_art=payload.has_cover_art,
    )


def split_revenue_from_path(
    input_path: Path,
    total_cents: int,
    event_type: RevenueEventType | None = None,
    correlation_id: str | None = None,
) -> dict[str, Any]:
    """Fan ``total_cents`` out directly, or as a revenue event when ``event_type`` is set."""

    payload = SplitsPayload.model_validate(_read_json(input_path))
    splits = payload.to_splits()
    resolved_event = event_type or payload.eventType

    if resolved_event is None:
        earnings = payout_service.fan_out(total_cents, splits, correlation_id=correlation_id)
        distributed = sum(earning.earnings_cents for earning in earnings)
        return {
            "totalRevenueCents": total_cents,
            "distributedCents": distributed,
            "undistributedCents": total_cents - distributed,
            "distributions": [earning.as_dict() for earning in earnings],
        }

    if payload.ownerProfileId is None and not splits:
        raise ValueError("ownerProfileId is required when no splits are defined.")
    distribution = payout_service.distribute(
        total_cents,
        resolved_event,
        splits,
        owner_profile_id=payload.ownerProfileId or 0,
        correlation_id=correlation_id,
    )
    return distribution.as_dict()


def catalog_summary(catalog_path: Path | None = None) -> dict[str, Any]:
    catalog = load_catalog(catalog_path)
    return {
        "catalogVersion": catalog.catalog_version,
        "loudnessTargets": [
            {
                "id": target.id,
                "displayName": target.display_name,
                "targetLufs": target.target_lufs,
                "toleranceLufs": target.tolerance_lufs,
                "maxTruePeakDbtp": target.max_true_peak_dbtp,
            }
            for target in catalog.loudness_targets
        ],
        "artworkRequirements": [
            {
                "id": requirement.id,
                "displayName": requirement.display_name,
                "minWidth": requirement.min_width,
                "minHeight": requirement.min_height,
                "maxWidth": requirement.max_width,
                "maxHeight": requirement.max_height,
                "maxFileSizeMb": requirement.max_file_size_mb,
                "allowedFormats": list(requirement.allowed_formats),
            }
            for requirement in catalog.artwork_requirements
        ],
    }


def _parse_manifest(manifest_path: Path) -> list[dict[str, Any]]:
    if manifest_path.suffix.lower() != ".json":
        raise ValueError("Manifest must end in .json.")

    payload = _read_json(manifest_path)
    if not isinstance(payload, list):
        raise ValueError("JSON manifest must be an array of item objects.")
    if not payload:
        raise ValueError("Manifest does not contain any items.")
    return payload


def run_batch_audio(
    manifest: Path,
    concurrency_limit: int,
    catalog_path: Path | None = None,
) -> tuple[list[dict[str, Any]], dict[str, int]]:
    rows = _parse_manifest(manifest)
    service = build_readiness_service(catalog_path)

    def _process(item: Any, item_index: int) -> dict[str, Any]:
        correlation_id = str(uuid4())
        item_id = str(item.get("id") or item_index) if isinstance(item, dict) else str(item_index)
        try:
            payload = AudioPayload.model_validate(item)
            profile, loudness = payload.to_domain()
            report = service.classify_audio(profile, loudness, correlation_id=correlation_id)
            return {
                "index": item_index,
                "id": item_id,
                "status": "succeeded",
                "qualityTier": report.quality_tier.value,
                "warningCount": len(report.warnings),
                "correlationId": correlation_id,
            }
        except Exception as error:  # noqa: BLE001
            return {
                "index": item_index,
                "id": item_id,
                "status": "failed",
                "correlationId": correlation_id,
                "error": str(error),
            }

    safe_concurrency = max(1, concurrency_limit)
    results: list[dict[str, Any]] = []
    with ThreadPoolExecutor(max_workers=safe_concurrency) as executor:
        futures = [executor.submit(_process, row, idx) for idx, row in enumerate(rows, start=1)]
        for future in as_completed(futures):
            results.append(future.result())

    results.sort(key=lambda item: item["index"])
    success_count = sum(1 for item in results if item["status"] == "succeeded")
    summary = {
        "total": len(results),
        "succeeded": success_count,
        "failed": len(results) - success_count,
    }
    return results, summary
