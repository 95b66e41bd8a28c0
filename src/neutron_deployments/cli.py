"""Command line interface: neutron-deploy."""

import json
import logging
import traceback
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from .artifacts import make_artifact_loader
from .chain import connect
from .config import (
    ArtifactSource,
    DeployConfig,
    OutputTarget,
    load_network_config,
    load_wallet_config,
)
from .constants import DEFAULT_LABEL, DEFAULT_NETWORK, DEFAULT_WASM_PATH, TROUBLESHOOTING_HINTS
from .deployments import DeploymentOrchestrator, diagnose_failure
from .exceptions import DeploymentError
from .paths import get_deployment_path
from .sinks import FileResultSink, LocalStorageSink, load_deployment_record, make_sink
from .wallets import discover_extension, make_wallet_provider

logger = logging.getLogger(__name__)

app = typer.Typer(help="Upload and instantiate CosmWasm contracts on Neutron.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_init_msg(raw: str) -> Dict[str, Any]:
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"--init-msg is not valid JSON: {e}") from e
    if not isinstance(msg, dict):
        raise ValueError("--init-msg must be a JSON object")
    return msg


def _report_failure(error: BaseException, verbose: bool) -> None:
    typer.echo(f"Deployment failed: {error}", err=True)
    typer.echo(f"Error kind: {getattr(error, 'kind', type(error).__name__)}", err=True)
    if verbose:
        typer.echo("Stack trace:", err=True)
        typer.echo("".join(traceback.format_exception(error)), err=True)

    advice = diagnose_failure(error)
    if advice:
        typer.echo(advice, err=True)

    typer.echo("Troubleshooting:", err=True)
    for hint in TROUBLESHOOTING_HINTS:
        typer.echo(f"  - {hint}", err=True)


@app.command()
def deploy(
    network: str = typer.Option(
        DEFAULT_NETWORK,
        "--network",
        "-n",
        help="Target network. Set NEUTRON_REST_URL to use another node; NEUTRON_RPC_URL only changes the chain suggested to a wallet extension.",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="JSON wallet config (networks.<name>.accounts)."
    ),
    wallet: str = typer.Option("mnemonic", "--wallet", help="Wallet source: mnemonic or extension."),
    extension_name: str = typer.Option(
        "keplr", "--extension", help="Registered wallet extension to use with --wallet extension."
    ),
    wasm: Path = typer.Option(Path(DEFAULT_WASM_PATH), "--wasm", help="Path to the .wasm file."),
    pick: bool = typer.Option(False, "--pick", help="Ask for the .wasm file interactively."),
    output: str = typer.Option("file", "--output", help="Record destination: file or storage."),
    output_dir: Path = typer.Option(Path("."), "--output-dir", help="Directory for deployment-<network>.json."),
    storage_file: Optional[Path] = typer.Option(None, "--storage-file", help="Local storage file."),
    label: str = typer.Option(DEFAULT_LABEL, "--label", help="Contract label."),
    init_msg: str = typer.Option("{}", "--init-msg", help="Instantiate message as JSON."),
    no_admin: bool = typer.Option(False, "--no-admin", help="Do not set the deployer as contract admin."),
    timestamp: bool = typer.Option(False, "--timestamp", help="Add deployedAt to the deployment file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and stack traces."),
) -> None:
    """Upload a contract, instantiate it and save the deployment record."""
    _configure_logging(verbose)

    try:
        network_config = load_network_config(network)
        config = DeployConfig(
            network=network_config,
            artifact=ArtifactSource(kind="interactive" if pick else "path", path=str(wasm)),
            output=OutputTarget(
                kind=output,
                output_dir=str(output_dir),
                storage_path=str(storage_file) if storage_file else None,
                include_timestamp=timestamp,
            ),
            label=label,
            init_msg=_parse_init_msg(init_msg),
            set_admin=not no_admin,
        )

        if wallet == "mnemonic":
            provider = make_wallet_provider(
                wallet, network_config, wallet_config=load_wallet_config(config_file, network)
            )
        else:
            provider = make_wallet_provider(
                wallet, network_config, extension=discover_extension(extension_name)
            )

        sink = make_sink(config.output)
        orchestrator = DeploymentOrchestrator(
            config,
            provider,
            make_artifact_loader(config.artifact),
            sink,
            client_factory=connect,
        )
        outcome = orchestrator.run()
    except (DeploymentError, ValueError) as e:
        _report_failure(e, verbose)
        raise typer.Exit(code=1)

    typer.echo("Deployment successful!")
    typer.echo(json.dumps(outcome.record.to_storage_dict(), indent=2))

    if outcome.persisted:
        if isinstance(sink, FileResultSink):
            typer.echo(f"Deployment info saved to: {sink.last_path}")
        elif isinstance(sink, LocalStorageSink):
            typer.echo(f"Deployment info saved to storage key '{sink.key}' in {sink.storage_path}")
    else:
        typer.echo(
            f"Warning: contract is deployed, but saving the record failed: {outcome.persistence_error}",
            err=True,
        )


@app.command()
def show(
    network: str = typer.Option(DEFAULT_NETWORK, "--network", "-n", help="Network name."),
    output_dir: Path = typer.Option(Path("."), "--output-dir", help="Directory holding deployment files."),
    storage: bool = typer.Option(False, "--storage", help="Read from local storage instead of a file."),
    storage_file: Optional[Path] = typer.Option(None, "--storage-file", help="Local storage file."),
) -> None:
    """Print a saved deployment record."""
    if storage:
        record = LocalStorageSink(storage_file).load()
    else:
        try:
            record = load_deployment_record(get_deployment_path(network, output_dir))
        except FileNotFoundError:
            record = None

    if record is None:
        typer.echo("No deployment record found", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(record, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
