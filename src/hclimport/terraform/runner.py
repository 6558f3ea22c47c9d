"""Run terraform init/import as subprocesses."""

import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional
from ..utils.errors import TerraformError
from ..utils.logging import get_logger

logger = get_logger("terraform.runner")


class TerraformRunner:
    """Thin wrapper around the terraform CLI in a working directory."""

    def __init__(self, working_dir: Path, binary: str = "terraform",
                 env: Optional[Dict[str, str]] = None, timeout: Optional[float] = None):
        self.working_dir = Path(working_dir)
        self.binary = binary
        self.env = dict(env or {})
        self.timeout = timeout

    def init(self) -> None:
        """Run 'terraform init'."""
        logger.info("Initializing Terraform with 'terraform init'...")
        self._run(["init", "-input=false"])

    def import_resource(self, address: str, import_id: str) -> None:
        """Run 'terraform import <address> <id>'."""
        self._run(["import", "-input=false", address, import_id])

    def _run(self, args: List[str]) -> subprocess.CompletedProcess:
        command = [self.binary] + args
        env = dict(os.environ)
        env.update(self.env)
        try:
            result = subprocess.run(
                command,
                cwd=str(self.working_dir),
                env=env,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise TerraformError(f"Terraform binary not found: {self.binary}", command) from e
        except subprocess.TimeoutExpired as e:
            raise TerraformError(f"Timeout executing {' '.join(command)}", command) from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise TerraformError(
                f"Problem executing {' '.join(command)} (exit {result.returncode}): {detail}",
                command
            )
        logger.debug(f"{' '.join(command)} succeeded")
        return result
