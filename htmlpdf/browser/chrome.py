"""Chrome process management."""

import asyncio
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

from htmlpdf.browser.cdp import CDPClient
from htmlpdf.browser.page import ChromePage
from htmlpdf.config import Settings, settings
from htmlpdf.utils.logging import get_logger

logger = get_logger(__name__)

CHROME_CANDIDATES = (
    "chromium",
    "chromium-browser",
    "google-chrome",
    "google-chrome-stable",
    "chrome",
)

DEVTOOLS_PORT_FILE = "DevToolsActivePort"


@dataclass
class ChromeProcess:
    """Represents a running Chrome process."""

    process: asyncio.subprocess.Process
    devtools_port: int
    user_data_dir: str

    @property
    def pid(self) -> int:
        return self.process.pid


def find_chrome_binary(configured: str | None = None) -> str:
    """Return the configured Chrome binary or the first one found on PATH."""
    if configured:
        return configured

    for name in CHROME_CANDIDATES:
        path = shutil.which(name)
        if path:
            return path

    raise RuntimeError("No Chrome/Chromium binary found on PATH; set HTMLPDF_CHROME_BINARY")


class ChromeLauncher:
    """Manages Chrome process lifecycle."""

    def __init__(self, config: Settings | None = None) -> None:
        self.config = config or settings

    def _build_chrome_args(
        self,
        binary: str,
        user_data_dir: str,
        extra_args: list[str],
    ) -> list[str]:
        """Build Chrome command line arguments."""
        args = [
            binary,
            "--headless=new",
            # Chrome picks a free port and writes it to DevToolsActivePort
            "--remote-debugging-port=0",
            f"--user-data-dir={user_data_dir}",
            # Disable features that interfere with automation
            "--no-first-run",
            "--no-default-browser-check",
            "--disable-background-networking",
            "--disable-client-side-phishing-detection",
            "--disable-default-apps",
            "--disable-extensions",
            "--disable-hang-monitor",
            "--disable-popup-blocking",
            "--disable-prompt-on-repost",
            "--disable-sync",
            "--disable-translate",
            "--metrics-recording-only",
            "--safebrowsing-disable-auto-update",
            "--disable-gpu",
            "--hide-scrollbars",
            "--mute-audio",
        ]
        args.extend(extra_args)
        args.append("about:blank")
        return args

    async def launch(self, extra_args: list[str]) -> ChromeProcess:
        """
        Launch a new headless Chrome process.

        Args:
            extra_args: Additional command line flags

        Returns:
            ChromeProcess instance with process details
        """
        binary = find_chrome_binary(self.config.chrome_binary)

        if self.config.chrome_user_data_base:
            Path(self.config.chrome_user_data_base).mkdir(parents=True, exist_ok=True)
        user_data_dir = tempfile.mkdtemp(
            prefix="htmlpdf_chrome_",
            dir=self.config.chrome_user_data_base,
        )

        args = self._build_chrome_args(binary, user_data_dir, extra_args)

        logger.info(
            "Launching Chrome",
            binary=binary,
            user_data_dir=user_data_dir,
        )

        process: asyncio.subprocess.Process | None = None
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            port = await self._wait_for_devtools_port(process, Path(user_data_dir))

        except Exception as e:
            await self._discard_launch(process, user_data_dir)
            raise RuntimeError(f"Failed to launch Chrome: {e}") from e
        except BaseException:
            await self._discard_launch(process, user_data_dir)
            raise

        logger.info("Chrome launched successfully", pid=process.pid, devtools_port=port)

        return ChromeProcess(process=process, devtools_port=port, user_data_dir=user_data_dir)

    async def _discard_launch(
        self,
        process: asyncio.subprocess.Process | None,
        user_data_dir: str,
    ) -> None:
        if process is not None and process.returncode is None:
            await self._stop_process(process)
        shutil.rmtree(user_data_dir, ignore_errors=True)

    async def _wait_for_devtools_port(
        self,
        process: asyncio.subprocess.Process,
        user_data_dir: Path,
    ) -> int:
        port_file = user_data_dir / DEVTOOLS_PORT_FILE

        async with asyncio.timeout(self.config.chrome_launch_timeout_seconds):
            while True:
                if process.returncode is not None:
                    raise RuntimeError(f"Chrome exited with code {process.returncode}")

                if port_file.exists():
                    first_line = port_file.read_text().splitlines()[:1]
                    if first_line and first_line[0].strip().isdigit():
                        return int(first_line[0])

                await asyncio.sleep(0.1)

    async def _stop_process(self, process: asyncio.subprocess.Process) -> None:
        try:
            process.terminate()
            try:
                await asyncio.wait_for(process.wait(), timeout=5)
            except TimeoutError:
                process.kill()
                await process.wait()
                logger.warning("Chrome required force kill", pid=process.pid)
        except ProcessLookupError:
            logger.debug("Chrome process already terminated", pid=process.pid)

    async def terminate(self, chrome_process: ChromeProcess) -> None:
        """Terminate a Chrome process and remove its profile directory."""
        logger.info("Terminating Chrome", pid=chrome_process.pid)

        try:
            await self._stop_process(chrome_process.process)
        finally:
            shutil.rmtree(chrome_process.user_data_dir, ignore_errors=True)
            logger.debug("Cleaned up user data dir", path=chrome_process.user_data_dir)


class ChromeBrowser:
    """A launched Chrome instance."""

    def __init__(self, launcher: ChromeLauncher, chrome_process: ChromeProcess) -> None:
        self.launcher = launcher
        self.chrome_process = chrome_process

    async def new_page(self) -> ChromePage:
        """Attach to the startup tab and prepare it for loading content."""
        client = CDPClient(
            self.chrome_process.devtools_port,
            command_timeout=self.launcher.config.cdp_command_timeout_seconds,
        )
        await client.connect()

        page = ChromePage(client)
        try:
            await page.enable()
        except BaseException:
            await client.disconnect()
            raise
        return page

    async def close(self) -> None:
        await self.launcher.terminate(self.chrome_process)


class ChromeEngine:
    """Engine that runs each browser as a local headless Chrome process."""

    def __init__(self, config: Settings | None = None) -> None:
        self.launcher = ChromeLauncher(config)

    async def launch(self, args: list[str]) -> ChromeBrowser:
        chrome_process = await self.launcher.launch(args)
        return ChromeBrowser(self.launcher, chrome_process)
