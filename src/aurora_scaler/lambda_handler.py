"""
EventBridge-scheduled Lambda entry points.

- prewarm_handler: raise tagged clusters to the pre-warm ACU range
- cooldown_handler: lower tagged clusters to the cool-down ACU range
- lambda_handler: picks one of the above from SCALING_MODE, so a single
  deployment artifact can back both functions

The scheduled event carries no useful payload and is ignored.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from aurora_scaler.aws.rds import get_rds_gateway
from aurora_scaler.capacity import CapacityUpdater, PassSummary
from aurora_scaler.config.settings import Settings, get_settings
from aurora_scaler.modes import ScalingMode

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Set the root level; the Lambda runtime already installs a handler."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    root.setLevel(level)


def run_scheduled_pass(mode: ScalingMode, settings: Optional[Settings] = None,
                       gateway: Any = None) -> PassSummary:
    """Resolve configuration for a mode and run one capacity pass."""
    settings = settings or get_settings()
    setting = settings.capacity_for(mode)
    gateway = gateway if gateway is not None else get_rds_gateway()

    logger.info(
        f"Starting {mode.value} pass for clusters tagged {mode.predicate} "
        f"(MinCapacity: {setting.min_capacity}, MaxCapacity: {setting.max_capacity}"
        f"{', dry-run' if settings.dry_run else ''})"
    )
    updater = CapacityUpdater(gateway, dry_run=settings.dry_run)
    return updater.run(mode.predicate, setting)


def _handle(mode_name: str, context: Any) -> Dict[str, Any]:
    settings = get_settings()
    configure_logging(settings.log_level)

    request_id = getattr(context, 'aws_request_id', None)
    logger.info(f"=== {mode_name} started at {datetime.now(timezone.utc).isoformat()} (request {request_id}) ===")

    try:
        mode = ScalingMode.from_name(mode_name)
        summary = run_scheduled_pass(mode, settings=settings)
    except Exception:
        # Surface to the runtime so the invocation is recorded as failed
        logger.exception(f"{mode_name} pass aborted")
        raise

    body = {
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'mode': mode.value,
        **summary.to_dict(),
    }
    if summary.failed:
        logger.warning(f"{mode.value} finished with {len(summary.failed)} failed cluster(s)")
    return {'statusCode': 200, 'body': json.dumps(body)}


def prewarm_handler(event, context):
    """Scheduled pre-warm: apply the pre-warm range to clusters tagged prewarm=yes."""
    return _handle(ScalingMode.PREWARM.value, context)


def cooldown_handler(event, context):
    """Scheduled cool-down: apply the cool-down range to clusters tagged cooldown=yes."""
    return _handle(ScalingMode.COOLDOWN.value, context)


def lambda_handler(event, context):
    return _handle(os.environ.get('SCALING_MODE', ScalingMode.PREWARM.value), context)
