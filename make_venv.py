"""Create a virtual environment, install the client in editable mode and open a shell in it."""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
import sys


def run_command(command: list[str]) -> None:
    subprocess.run(command, check=True)


def venv_python(venv_path: Path) -> Path:
    if os.name == "nt":
        return venv_path / "Scripts" / "python.exe"
    return venv_path / "bin" / "python"


def launch_shell_with_venv(venv_path: Path) -> None:
    if os.name == "nt":
        activate_bat = venv_path / "Scripts" / "activate.bat"
        if not activate_bat.exists():
            raise FileNotFoundError(f"Activation script not found at {activate_bat}")
        subprocess.run(["cmd.exe", "/k", str(activate_bat)], check=True)
        return

    activate_script = venv_path / "bin" / "activate"
    if not activate_script.exists():
        raise FileNotFoundError(f"Activation script not found at {activate_script}")
    print("Type 'exit' to leave the environment.")
    subprocess.run(["/bin/bash", "-c", f"source '{activate_script}' && exec $SHELL"], check=True)


def main() -> None:
    project_root = Path(__file__).resolve().parent
    venv_path = project_root / ".venv"

    print(f"Using Python interpreter: {sys.executable}")
    run_command([sys.executable, "-m", "venv", str(venv_path)])

    python = str(venv_python(venv_path))
    run_command([python, "-m", "pip", "install", "--upgrade", "pip"])
    run_command([python, "-m", "pip", "install", "-e", f"{project_root}[test]"])

    launch_shell_with_venv(venv_path)


if __name__ == "__main__":
    main()
