"""
Chart URL Refresher

Application service running one refresh pass over a song's charts:
validate the session, issue one token per distinct file in a single batch,
and rewrite each file-backed chart's URL.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Sequence

from ..domain.errors import BatchIssueError
from ..domain.file_access.entities import ChartRecord, FileAccessToken, Identity
from ..domain.file_access.session_guard import SessionGuard
from ..domain.file_access.token_issuer import TokenIssuer
from ..domain.file_access.url_builder import build_file_url

logger = logging.getLogger(__name__)


class ChartUrlRefresher:
    """
    Rewrites chart URLs with fresh file access tokens.

    A pass never raises. Every failure keeps the chart's existing URL, which
    may still be served on its previous token.
    """

    def __init__(self, session_guard: SessionGuard, token_issuer: TokenIssuer, base_url: str):
        """
        Initialize ChartUrlRefresher.

        Args:
            session_guard: Validates the caller before issuance
            token_issuer: Issues the batch of tokens
            base_url: Origin of the serve-file-inline endpoint
        """
        self.session_guard = session_guard
        self.token_issuer = token_issuer
        self.base_url = base_url

    def refresh(self, charts: Sequence[ChartRecord], band_id: str) -> List[ChartRecord]:
        """
        Run one refresh pass.

        Args:
            charts: Chart records of one song
            band_id: Band the charts belong to

        Returns:
            The input charts on any pass-wide failure, otherwise a new list
            where eligible charts carry rebuilt URLs
        """
        if not charts:
            return charts

        try:
            identity = self.session_guard.ensure_valid_session()
        except Exception as e:
            logger.warning(f"Skipping chart URL refresh, no valid session: {e}")
            return charts

        eligible = [chart for chart in charts if chart.needs_token]
        if not eligible:
            return charts

        paths = list(dict.fromkeys(chart.storage_path for chart in eligible))

        try:
            tokens = self._issue(paths, identity, band_id)
        except BatchIssueError as e:
            logger.error(f"{e}; keeping existing URLs")
            return charts

        failed = 0
        refreshed = []
        for chart in charts:
            if not chart.needs_token:
                refreshed.append(chart)
                continue

            token = tokens.get(chart.storage_path)
            if token is None:
                failed += 1
                refreshed.append(chart)
                continue

            url = build_file_url(self.base_url, chart.storage_path, token.token)
            refreshed.append(replace(chart, url=url))

        if failed:
            logger.warning(f"{failed} of {len(eligible)} chart URLs failed to refresh")

        return refreshed

    def _issue(self, paths: List[str], identity: Identity, band_id: str) -> Dict[str, FileAccessToken]:
        """
        Issue the batch, treating an empty result as a total failure.

        Raises:
            BatchIssueError: If no token came back for a non-empty request
        """
        try:
            tokens = self.token_issuer.issue_batch(paths, identity, band_id)
        except Exception as e:
            raise BatchIssueError(
                f"Token batch raised for {len(paths)} chart files: {e}", original_error=e
            ) from e

        if not tokens:
            raise BatchIssueError(f"Failed to issue file access tokens for {len(paths)} chart files")
        return tokens
