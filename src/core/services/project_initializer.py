"""Project creation orchestration.

Runs the resolve -> download -> extract pipeline for one `ProjectRequest`
and maps every outcome to an `ExitCode`. The service never prints: status
text, warnings and errors go through `InitializerHooks`, which the CLI
implements with Rich.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping

from core.domain.errors import CreateProjectError, DirectoryExistsError, ExtractionError
from core.domain.models import (
    Cancelled,
    ExitCode,
    ProjectRequest,
    PromptResult,
    ReleaseDescriptor,
    TemplateSelection,
    TransferPhase,
    TransferState,
    VersionMode,
    VersionSelection,
)
from core.domain.package_manager import PackageManager, detect_package_manager
from core.domain.templates import DEFAULT_TEMPLATE, TEMPLATES, resolve_template
from core.interfaces.pipeline import ArchiveExtractor, ArchiveFetcher, ReleaseResolver

logger = logging.getLogger(__name__)


class InitState(str, Enum):
    VALIDATING_INPUT = "validating_input"
    RESOLVING_VERSION = "resolving_version"
    DOWNLOADING = "downloading"
    EXTRACTING = "extracting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class CreateOptions:
    """Options as they arrive from the CLI, before validation."""

    template: str = DEFAULT_TEMPLATE
    force: bool = False
    version: VersionSelection = field(default_factory=VersionSelection.latest)


@dataclass(frozen=True)
class NextSteps:
    project_name: str
    package_manager: PackageManager

    def commands(self) -> list[str]:
        pm = self.package_manager.commands
        return [f"cd {self.project_name}", pm.install, pm.dev]


@dataclass
class InitializerHooks:
    """Optional callbacks for UI layers (spinners, warnings, prompts)."""

    step_start: Callable[[str], None] | None = None
    step_succeed: Callable[[str], None] | None = None
    step_fail: Callable[[str], None] | None = None
    info: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None
    error: Callable[[CreateProjectError], None] | None = None
    cancelled: Callable[[str], None] | None = None
    next_steps: Callable[[NextSteps], None] | None = None
    ask_project_name: Callable[[], PromptResult[str]] | None = None


class ProjectInitializer:
    def __init__(
        self,
        *,
        resolver: ReleaseResolver,
        fetcher: ArchiveFetcher,
        extractor: ArchiveExtractor,
        templates: Mapping[str, TemplateSelection] = TEMPLATES,
        hooks: InitializerHooks | None = None,
        environ: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> None:
        self._resolver = resolver
        self._fetcher = fetcher
        self._extractor = extractor
        self._templates = templates
        self._hooks = hooks or InitializerHooks()
        self._environ = environ
        self._cwd = cwd
        self.state = InitState.VALIDATING_INPUT
        self.transfer: TransferState | None = None

    async def create(self, project_name: str | None, options: CreateOptions) -> ExitCode:
        """Validate the template, ask for a name if needed, then `run`."""

        self._transition(InitState.VALIDATING_INPUT)
        try:
            template = resolve_template(options.template, self._templates)
        except CreateProjectError as exc:
            return self._fail(exc)

        if not project_name or not project_name.strip():
            answer = self._ask_project_name()
            if isinstance(answer, Cancelled):
                self._emit(self._hooks.cancelled, "Project creation cancelled.")
                return ExitCode.SUCCESS
            project_name = answer.value
            if not project_name.strip():
                return self._fail(CreateProjectError("Project name is required."))

        request = ProjectRequest.build(
            project_name,
            template=template,
            force=options.force,
            version=options.version,
            cwd=self._cwd,
        )
        return await self.run(request)

    async def run(self, request: ProjectRequest) -> ExitCode:
        transfer = TransferState()
        self.transfer = transfer
        try:
            self._transition(InitState.VALIDATING_INPUT)
            self.validate(request)

            self._transition(InitState.RESOLVING_VERSION)
            release = await self._resolve(request.version)

            self._transition(InitState.DOWNLOADING)
            transfer.archive_path = await self._download(release, request.template)
            transfer.advance(TransferPhase.DOWNLOADED)

            self._transition(InitState.EXTRACTING)
            transfer.advance(TransferPhase.EXTRACTING)
            await self._extract(transfer.archive_path, request)
            transfer.advance(TransferPhase.COMPLETE)
        except ExtractionError as exc:
            transfer.discard()
            return self._fail(exc)
        except CreateProjectError as exc:
            transfer.phase = TransferPhase.FAILED
            return self._fail(exc)

        self._transition(InitState.DONE)
        steps = NextSteps(
            project_name=request.target_name,
            package_manager=detect_package_manager(self._environ),
        )
        self._emit(self._hooks.next_steps, steps)
        return ExitCode.SUCCESS

    def validate(self, request: ProjectRequest) -> None:
        resolve_template(request.template.name, self._templates)
        if request.target_path.exists():
            if not request.force:
                raise DirectoryExistsError(request.target_name, request.target_path)
            self._emit(self._hooks.warning, f"Warning: Overwriting existing directory {request.target_name}")

    async def _resolve(self, selection: VersionSelection) -> ReleaseDescriptor:
        if selection.mode is VersionMode.PINNED:
            self._emit(self._hooks.step_start, f"Using release {selection.tag}...")
        elif selection.mode is VersionMode.PRERELEASE:
            self._emit(self._hooks.step_start, "Fetching latest pre-release information...")
        else:
            self._emit(self._hooks.step_start, "Fetching latest release information...")

        try:
            release = await self._resolver.resolve(selection)
        except CreateProjectError:
            self._emit(self._hooks.step_fail, "Failed to fetch release information.")
            raise

        self._emit(self._hooks.step_succeed, f"Successfully fetched release: {release.tag}")
        self._emit(self._hooks.info, f"Release Name: {release.display_name}")
        if release.published_at is not None:
            self._emit(self._hooks.info, f"Published At: {release.published_at.isoformat()}")
        if release.url:
            self._emit(self._hooks.info, f"URL: {release.url}")
        return release

    async def _download(self, release: ReleaseDescriptor, template: TemplateSelection) -> Path:
        self._emit(self._hooks.step_start, f"Downloading {template.name} template ({release.tag})...")
        try:
            path = await self._fetcher.fetch(release, template.name)
        except CreateProjectError:
            self._emit(self._hooks.step_fail, "Failed to download template.")
            raise
        self._emit(
            self._hooks.step_succeed,
            f"Successfully downloaded {template.name} template ({release.tag}) to {path}",
        )
        return path

    async def _extract(self, archive_path: Path, request: ProjectRequest) -> None:
        self._emit(self._hooks.step_start, f"Decompressing template into {request.target_name}...")
        try:
            await asyncio.to_thread(self._extractor.extract, archive_path, request.target_path)
        except CreateProjectError:
            self._emit(self._hooks.step_fail, "Failed to decompress template.")
            raise
        self._emit(
            self._hooks.step_succeed,
            f"Successfully created RedwoodSDK starter project ({request.template.name} template) "
            f"in {request.target_name}",
        )

    def _ask_project_name(self) -> PromptResult[str]:
        if self._hooks.ask_project_name is None:
            return Cancelled()
        return self._hooks.ask_project_name()

    def _transition(self, state: InitState) -> None:
        logger.debug("state %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, exc: CreateProjectError) -> ExitCode:
        self._transition(InitState.FAILED)
        logger.debug("run failed", exc_info=exc)
        self._emit(self._hooks.error, exc)
        return ExitCode.FAILURE

    @staticmethod
    def _emit(callback: Callable | None, value: object) -> None:
        if callback is not None:
            callback(value)
