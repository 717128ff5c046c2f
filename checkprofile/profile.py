# ProblemProfile: the registry of analyzer problems with user overrides applied,
# and the filter deciding which findings get reported.

from __future__ import annotations

import copy
import logging
from typing import Iterable, Optional

from checkprofile.collaborators.base import (
    UNSET,
    CatalogLoader,
    LogSink,
    ProblemReporter,
    SettingsStore,
    SuppressionOracle,
    VersionChecker,
)
from checkprofile.config import BINARY_PATH_KEY, PROBLEMS_KEY
from checkprofile.errors import IncompatibleVersionError, PersistedStateCorruptError
from checkprofile.problems.models import Finding, Problem

logger = logging.getLogger(__name__)

PROBLEM_DELIMITER = "!"
ID_DELIMITER = "="


class ProblemProfile:
    """
    All problems known for one analyzer binary, keyed by id.

    Construction checks the analyzer version and loads its catalog; both
    steps must succeed or the constructor raises. Persisted overrides are
    applied afterwards with load_overrides().
    """

    def __init__(
        self,
        log_sink: LogSink,
        binary_path: str,
        version_checker: VersionChecker,
        catalog_loader: CatalogLoader,
    ) -> None:
        self.log_sink = log_sink
        self.binary_path = binary_path
        self.version_checker = version_checker
        self.catalog_loader = catalog_loader
        self.problems: dict[str, Problem] = {}

        version = version_checker.check_version(binary_path)
        if not version.is_compatible():
            raise IncompatibleVersionError(version)
        self.problems = self._load_problems(binary_path)

    def _load_problems(self, binary_path: str) -> dict[str, Problem]:
        problems: dict[str, Problem] = {}
        for problem in self.catalog_loader.load_catalog(binary_path):
            if problem.id in problems:
                self.log_sink.log_warning(f"Found duplicate id: {problem.id}")
            problems[problem.id] = problem
        logger.debug("Catalog for %s has %d problems", binary_path, len(problems))
        return problems

    def on_analyzer_path_changed(self, new_path: str) -> None:
        """
        Reload the catalog for a new analyzer binary.

        Called from change notifications, so errors are logged, not raised.
        The version is checked again; on any failure the previous registry stays.
        """
        self.binary_path = new_path
        try:
            version = self.version_checker.check_version(new_path)
            if not version.is_compatible():
                raise IncompatibleVersionError(version)
            self.problems = self._load_problems(new_path)
        except Exception as e:
            self.log_sink.log_error("Error reloading the problems", e)

    def watch(self, store: SettingsStore) -> None:
        """Reload whenever the analyzer path in store changes."""

        def _on_change(key: str, old: str, new: str) -> None:
            if key == BINARY_PATH_KEY:
                self.on_analyzer_path_changed(new)

        store.add_listener(_on_change)

    def load_overrides(self, store: SettingsStore, key: str = PROBLEMS_KEY) -> None:
        """Apply persisted enabled/severity overrides; unknown ids are skipped."""
        settings = store.get_string(key)
        if settings == UNSET:
            return
        try:
            for problem_setting in settings.split(PROBLEM_DELIMITER):
                if not problem_setting:
                    continue
                problem_id, sep, state = problem_setting.partition(ID_DELIMITER)
                if not sep or not problem_id or not state:
                    raise PersistedStateCorruptError(f"Expected id{ID_DELIMITER}state, got {problem_setting!r}")
                problem = self.problems.get(problem_id)
                if problem is not None and not problem.deserialize_mutable_state(state):
                    self.log_sink.log_warning(f"Ignoring invalid state {state!r} for problem {problem_id}")
        except Exception as e:
            self.log_sink.show_user_error("Invalid problem profile preferences found", e)

    def save_overrides(self, store: SettingsStore, key: str = PROBLEMS_KEY) -> None:
        settings = "".join(
            f"{problem.id}{ID_DELIMITER}{problem.serialize_mutable_state()}{PROBLEM_DELIMITER}"
            for problem in self.problems.values()
        )
        store.set_string(key, settings)

    def reset_all_to_defaults(self, store: SettingsStore, key: str = PROBLEMS_KEY) -> None:
        store.reset_to_default(key)
        for problem in self.problems.values():
            problem.reset_to_default()

    def duplicate(self) -> ProblemProfile:
        """Copy with every problem duplicated; collaborators are shared."""
        profile = copy.copy(self)
        profile.problems = {pid: problem.duplicate() for pid, problem in self.problems.items()}
        return profile

    def categories(self) -> set[str]:
        return {problem.category for problem in self.problems.values()}

    def problems_in_category(self, category: str) -> list[Problem]:
        return [problem for problem in self.problems.values() if problem.category == category]

    def all_problems(self) -> list[Problem]:
        return list(self.problems.values())

    def get_problem(self, problem_id: str) -> Optional[Problem]:
        return self.problems.get(problem_id)

    def is_problem_enabled(self, finding: Finding) -> bool:
        """
        Whether finding should be reported according to this profile.

        Ids missing from the profile count as enabled and keep their severity.
        For a known, enabled id the finding takes the profile's severity.
        """
        problem = self.problems.get(finding.rule_id)
        if problem is None:
            return True
        if problem.enabled:
            finding.set_severity(problem.severity)
        return problem.enabled

    def report_enabled_problems(
        self,
        findings: Iterable[Finding],
        reporter: ProblemReporter,
        suppressions: SuppressionOracle,
    ) -> int:
        """
        Pass each enabled, unsuppressed finding to reporter, in input order.

        The enablement check runs first, so its severity update is applied to
        every enabled finding, including ones that are then suppressed.
        Returns the number of findings reported.
        """
        reported = 0
        for finding in findings:
            if self.is_problem_enabled(finding) and not suppressions.is_suppressed(
                finding.file, finding.rule_id, finding.line
            ):
                reporter.report(finding)
                reported += 1
        return reported

    def message_for_id(self, problem_id: str) -> Optional[str]:
        problem = self.problems.get(problem_id)
        if problem is None:
            return None
        return problem.message
