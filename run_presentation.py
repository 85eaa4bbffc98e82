from __future__ import annotations

import argparse
import os
import signal
import subprocess
import sys
import time
import webbrowser
from pathlib import Path


def _repo_root() -> Path:
    return Path(__file__).resolve().parent


def _run_with_env(cmd: list[str], *, cwd: Path, env_overrides: dict[str, str]) -> subprocess.Popen:
    env = os.environ.copy()
    env.update(env_overrides)
    return subprocess.Popen(
        cmd,
        cwd=str(cwd),
        env=env,
        stdout=None,
        stderr=None,
        shell=False,
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Serve a slidedeck presentation and open it in the browser.")
    p.add_argument("presentation", nargs="?", help="Presentation directory (default: presentations/default)")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--reload", action="store_true", help="Restart the server when backend code changes")
    p.add_argument("--no-browser", action="store_true")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    root = _repo_root()

    env_overrides: dict[str, str] = {}
    if args.presentation:
        pres_dir = Path(args.presentation).resolve()
        if not (pres_dir / "presentation.json").exists():
            print(f"[run_presentation] No presentation.json in {pres_dir}")
            return 1
        env_overrides["PRESENTATION_DIR"] = str(pres_dir)

    print("[run_presentation] Starting presentation")
    backend_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "slidedeck.main:app",
        "--app-dir",
        str(root / "apps" / "backend"),
        "--port",
        str(args.port),
    ]
    if args.reload:
        backend_cmd.append("--reload")

    proc = _run_with_env(backend_cmd, cwd=root, env_overrides=env_overrides)
    try:
        url = f"http://localhost:{args.port}"
        time.sleep(0.5)
        print("")
        print(f"[run_presentation] Presentation: {url}")
        print(f"[run_presentation] State API:    {url}/api/presentation/state")
        print("[run_presentation] Right arrow starts the talk; space pauses the clock.")
        print("[run_presentation] Press Ctrl+C to stop.")
        print("")

        if not args.no_browser:
            # Best-effort; a headless box simply has no browser.
            try:
                webbrowser.open(url, new=1)
            except Exception:
                pass

        while True:
            code = proc.poll()
            if code is not None:
                print(f"[run_presentation] Server exited with code {code}.")
                return code
            time.sleep(0.2)
    except KeyboardInterrupt:
        return 0
    finally:
        if proc.poll() is None:
            if sys.platform.startswith("win"):
                proc.terminate()
            else:
                proc.send_signal(signal.SIGTERM)
            try:
                proc.wait(timeout=3)
            except subprocess.TimeoutExpired:
                proc.kill()


if __name__ == "__main__":
    raise SystemExit(main())
