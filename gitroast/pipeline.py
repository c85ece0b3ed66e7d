"""
Roast pipeline (orchestrator).

Stages:
  idle -> fetching_profile -> fetching_repos -> fetching_activity
       -> generating_critique -> success
  (any fetching/generating stage) -> error

Each stage is a separate frozen state type carrying only the data valid in that
stage; the presentation layer observes them through `on_state` and reads the
`description` of loading states.

Sequencing is strictly linear (first error wins). Only NotFoundError and
UpstreamError from the profile/repository fetchers can end a run in `Error`;
activity and critique failures degrade inside their components.

Overlapping runs: `submit()` cancels the in-flight run, and every run carries a
run number so a superseded run can never publish state or write history.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, List, Optional, Sequence, Union

from gitroast.errors import RoastError
from gitroast.github.languages import aggregate_languages
from gitroast.github.models import ActivitySummary, LanguageHistogram, Profile, Repository
from gitroast.history import HistoryRecord, HistoryStore
from gitroast.roast.models import CritiqueResult
from gitroast.utils.timing import elapsed_ms, now_epoch_ms, now_perf
from gitroast.utils.trace_context import TraceContext

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed. Just like your career."


class Stage(str, Enum):
    IDLE = "idle"
    FETCHING_PROFILE = "fetching_profile"
    FETCHING_REPOS = "fetching_repos"
    FETCHING_ACTIVITY = "fetching_activity"
    GENERATING_CRITIQUE = "generating_critique"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class RoastReport:
    """Final aggregate handed to the presentation layer."""

    profile: Profile
    critique: CritiqueResult
    activity: ActivitySummary
    languages: LanguageHistogram


@dataclass(frozen=True)
class Idle:
    stage: ClassVar[Stage] = Stage.IDLE

    @property
    def description(self) -> str:
        return ""


@dataclass(frozen=True)
class FetchingProfile:
    stage: ClassVar[Stage] = Stage.FETCHING_PROFILE
    login: str

    @property
    def description(self) -> str:
        return "EXPOSING YOUR TRASH..."


@dataclass(frozen=True)
class FetchingRepos:
    stage: ClassVar[Stage] = Stage.FETCHING_REPOS
    profile: Profile

    @property
    def description(self) -> str:
        return f"LAUGHING AT {self.profile.public_repos} USELESS REPOS..."


@dataclass(frozen=True)
class FetchingActivity:
    stage: ClassVar[Stage] = Stage.FETCHING_ACTIVITY
    profile: Profile
    repositories: Sequence[Repository]

    @property
    def description(self) -> str:
        return "JUDGING YOUR SAD LIFE..."


@dataclass(frozen=True)
class GeneratingCritique:
    stage: ClassVar[Stage] = Stage.GENERATING_CRITIQUE
    profile: Profile
    repositories: Sequence[Repository]
    activity: ActivitySummary
    languages: LanguageHistogram

    @property
    def description(self) -> str:
        return "PREPARING TO HURT YOU..."


@dataclass(frozen=True)
class Success:
    stage: ClassVar[Stage] = Stage.SUCCESS
    report: RoastReport

    @property
    def description(self) -> str:
        return ""


@dataclass(frozen=True)
class Error:
    stage: ClassVar[Stage] = Stage.ERROR
    message: str

    @property
    def description(self) -> str:
        return ""


WorkflowState = Union[Idle, FetchingProfile, FetchingRepos, FetchingActivity, GeneratingCritique, Success, Error]
StateListener = Callable[[WorkflowState], None]
HistoryListener = Callable[[List[HistoryRecord]], None]


def is_loading(state: WorkflowState) -> bool:
    return state.stage not in (Stage.IDLE, Stage.SUCCESS, Stage.ERROR)


class RoastPipeline:
    """
    Runs one roast at a time and publishes its state transitions.

    Args:
        github: object with async `profile`, `repositories` and `activity` (see GithubClient)
        roaster: object with async `generate(profile, repositories, activity, languages)`
        history: HistoryStore written once per successful run
        on_state: called with every published WorkflowState
        on_history_changed: called with the new history after every write or clear
    """

    def __init__(
        self,
        github: Any,
        roaster: Any,
        history: HistoryStore,
        on_state: Optional[StateListener] = None,
        on_history_changed: Optional[HistoryListener] = None,
    ):
        self.github = github
        self.roaster = roaster
        self.history = history
        self.on_state = on_state
        self.on_history_changed = on_history_changed
        self.state: WorkflowState = Idle()
        self._run_seq = 0
        self._task: Optional[asyncio.Task] = None

    def _begin(self, login: str) -> int:
        if not isinstance(login, str) or not login.strip():
            raise ValueError("A GitHub username is required")
        self._run_seq += 1
        return self._run_seq

    def _is_current(self, run_no: int) -> bool:
        return run_no == self._run_seq

    def _notify(self, listener: Optional[Callable[[Any], None]], value: Any) -> None:
        if listener is None:
            return
        try:
            listener(value)
        except Exception as e:  # noqa: BLE001
            logger.error(f"State listener failed: {e}")

    def _publish(self, run_no: int, state: WorkflowState) -> bool:
        if not self._is_current(run_no):
            logger.debug("Dropping %s from superseded run #%s", state.stage.value, run_no)
            return False
        self.state = state
        logger.debug("Stage -> %s", state.stage.value)
        self._notify(self.on_state, state)
        return True

    async def run(self, login: str) -> WorkflowState:
        """Run one roast to completion and return its terminal state (Success or Error)."""
        run_no = self._begin(login)
        return await self._run(run_no, login.strip())

    def submit(self, login: str) -> "asyncio.Task[WorkflowState]":
        """Start a roast in the background, cancelling and superseding any run in flight."""
        run_no = self._begin(login)
        if self._task is not None and not self._task.done():
            logger.info("Cancelling superseded roast run")
            self._task.cancel()
        self._task = asyncio.ensure_future(self._run(run_no, login.strip()))
        return self._task

    async def _run(self, run_no: int, login: str) -> WorkflowState:
        token = TraceContext.set_trace_id(TraceContext.generate_trace_id())
        try:
            return await self._execute(run_no, login)
        finally:
            TraceContext.reset_trace_id(token)

    async def _execute(self, run_no: int, login: str) -> WorkflowState:
        start = now_perf()
        logger.info(f"Roasting {login} (run #{run_no})")
        try:
            logger.debug("History holds %s entries", len(self.history.read()))
            self._publish(run_no, FetchingProfile(login=login))
            profile = await self.github.profile(login)

            self._publish(run_no, FetchingRepos(profile=profile))
            repositories = await self.github.repositories(login)

            self._publish(run_no, FetchingActivity(profile=profile, repositories=repositories))
            activity = await self.github.activity(login)
            languages = aggregate_languages(repositories)

            self._publish(
                run_no,
                GeneratingCritique(profile=profile, repositories=repositories, activity=activity, languages=languages),
            )
            critique = await self.roaster.generate(profile, repositories, activity, languages)
        except RoastError as e:
            logger.warning(f"Roast of {login} failed: {e.message}")
            error = Error(message=e.message or GENERIC_ERROR_MESSAGE)
            self._publish(run_no, error)
            return error
        except Exception:
            logger.exception(f"Unexpected failure while roasting {login}")
            error = Error(message=GENERIC_ERROR_MESSAGE)
            self._publish(run_no, error)
            return error

        success = Success(
            report=RoastReport(profile=profile, critique=critique, activity=activity, languages=languages)
        )
        if not self._publish(run_no, success):
            return success

        self._record_history(profile, critique)
        logger.info(f"Roasted {login} in {elapsed_ms(start)}ms (score={critique.score})")
        return success

    def _record_history(self, profile: Profile, critique: CritiqueResult) -> None:
        record = HistoryRecord(
            username=profile.login,
            avatar_url=profile.avatar_url,
            score=critique.score,
            timestamp=now_epoch_ms(),
        )
        try:
            history = self.history.append(record)
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Could not record {profile.login} in history: {e}")
            return
        self._notify(self.on_history_changed, history)

    def read_history(self) -> List[HistoryRecord]:
        return self.history.read()

    def clear_history(self) -> None:
        self.history.clear()
        self._notify(self.on_history_changed, [])

    def reset(self) -> None:
        """Return to Idle, e.g. when the user dismisses an error."""
        self._run_seq += 1
        self.state = Idle()
        self._notify(self.on_state, self.state)

    async def close(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        for collaborator in (self.github, self.roaster):
            close = getattr(collaborator, "close", None)
            if close is not None:
                await close()
