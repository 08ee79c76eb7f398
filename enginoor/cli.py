"""CLI entry point for enginoor."""

import asyncio
import json
import logging
from typing import Optional

import click

from .config import Config
from .engine import (
    EngineAPIClient,
    EngineClientError,
    ForkchoiceState,
    PayloadAttributes,
)


def setup_logging(level: str) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if level.upper() != "DEBUG":
        logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def _load_payload(value: str) -> dict:
    """Parse a payload given inline or as @path."""
    if value.startswith("@"):
        try:
            with open(value[1:], "r") as f:
                value = f.read()
        except OSError as e:
            raise click.BadParameter(f"cannot read {value[1:]}: {e}")
    try:
        payload = json.loads(value)
    except ValueError as e:
        raise click.BadParameter(f"not valid JSON: {e}")
    if not isinstance(payload, dict):
        raise click.BadParameter("payload must be a JSON object")
    return payload


def _hex_bytes(ctx, param, value):
    """Decode a 0x-prefixed hex option into bytes."""
    if value is None:
        return None
    if not value.startswith("0x"):
        raise click.BadParameter("must be 0x-prefixed hex")
    try:
        return bytes.fromhex(value[2:])
    except ValueError:
        raise click.BadParameter(f"not valid hex: {value}")


def _run_call(config: Config, call) -> None:
    """Build a client from config, run one call and print the result."""
    logger = logging.getLogger(__name__)

    try:
        jwt_secret = config.validate()
    except EngineClientError as e:
        raise click.ClickException(str(e))

    async def _execute() -> dict:
        async with EngineAPIClient(
            url=config.engine_api_url,
            jwt_secret=jwt_secret,
            timeout=config.timeout,
            jwt_expiry=config.jwt_expiry,
        ) as client:
            return await call(client)

    logger.info(f"Engine API: {config.engine_api_url}")
    try:
        result = asyncio.run(_execute())
    except EngineClientError as e:
        raise click.ClickException(str(e))

    click.echo(json.dumps(result, indent=2))


@click.group()
@click.version_option(package_name="enginoor")
@click.option(
    "--engine-api-url",
    default="http://localhost:8551",
    help="Engine API URL of the execution client",
    envvar="ENGINOOR_ENGINE_API_URL",
)
@click.option(
    "--jwt-secret",
    help="JWT secret, used as-is as the HMAC key",
    envvar="JWT_SECRET",
)
@click.option(
    "--jwt-secret-file",
    type=click.Path(exists=True),
    help="Path to hex-encoded JWT secret file",
    envvar="ENGINOOR_JWT_SECRET_FILE",
)
@click.option(
    "--timeout",
    default=10.0,
    type=float,
    help="Request timeout in seconds",
    envvar="ENGINOOR_TIMEOUT",
)
@click.option(
    "--jwt-expiry",
    default=60,
    type=int,
    help="JWT validity window in seconds",
    envvar="ENGINOOR_JWT_EXPIRY",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level",
    envvar="ENGINOOR_LOG_LEVEL",
)
@click.pass_context
def cli(
    ctx: click.Context,
    engine_api_url: str,
    jwt_secret: Optional[str],
    jwt_secret_file: Optional[str],
    timeout: float,
    jwt_expiry: int,
    log_level: str,
):
    """enginoor - minimal Ethereum Engine API client."""
    setup_logging(log_level)
    ctx.obj = Config(
        engine_api_url=engine_api_url,
        jwt_secret_raw=jwt_secret or "",
        jwt_secret_path=jwt_secret_file or "",
        timeout=timeout,
        jwt_expiry=jwt_expiry,
        log_level=log_level,
    )


@cli.command()
@click.option("--head", required=True, callback=_hex_bytes, help="Head block hash (0x-prefixed)")
@click.option("--safe", required=True, callback=_hex_bytes, help="Safe block hash (0x-prefixed)")
@click.option("--finalized", required=True, callback=_hex_bytes, help="Finalized block hash (0x-prefixed)")
@click.option("--timestamp", type=click.IntRange(min=0), help="Payload timestamp; requests a payload build when set")
@click.option("--prev-randao", default="0x" + "00" * 32, callback=_hex_bytes, help="prevRandao for the payload build")
@click.option("--fee-recipient", default="0x" + "00" * 20, callback=_hex_bytes, help="Suggested fee recipient address")
@click.pass_obj
def forkchoice(
    config: Config,
    head: bytes,
    safe: bytes,
    finalized: bytes,
    timestamp: Optional[int],
    prev_randao: bytes,
    fee_recipient: bytes,
):
    """Send engine_forkchoiceUpdatedV1."""
    try:
        state = ForkchoiceState.from_bytes(head, safe, finalized)
        attributes = None
        if timestamp is not None:
            attributes = PayloadAttributes.from_values(timestamp, prev_randao, fee_recipient)
    except ValueError as e:
        raise click.BadParameter(str(e))

    _run_call(config, lambda client: client.forkchoice_updated_v1(state, attributes))


@cli.command("new-payload")
@click.argument("payload")
@click.pass_obj
def new_payload(config: Config, payload: str):
    """Send engine_newPayloadV1 with PAYLOAD (JSON or @file)."""
    execution_payload = _load_payload(payload)
    _run_call(config, lambda client: client.new_payload_v1(execution_payload))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
