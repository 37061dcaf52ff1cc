"""
Lichess API client for downloading arena tournament games.
"""
import requests
import json
import time
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class LichessClient:
    """Client for interacting with Lichess API."""

    BASE_URL = "https://lichess.org/api"
    RATE_LIMIT_DELAY = 1.0  # Lichess allows ~60 req/min

    def __init__(self):
        self.session = requests.Session()
        self.session.headers.update({
            'Accept': 'application/x-ndjson',
            'User-Agent': 'ArenaBonus/1.0'
        })

    def _make_request(self, url: str, params: dict = None) -> Optional[str]:
        """Make API request with NDJSON response handling."""
        time.sleep(self.RATE_LIMIT_DELAY)
        try:
            response = self.session.get(url, params=params, timeout=120, stream=True)
            response.raise_for_status()
            return response.text
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.warning(f"Tournament not found: {url}")
                return None
            logger.error(f"HTTP error fetching {url}: {str(e)}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error fetching {url}: {str(e)}")
            return None

    def verify_tournament(self, tournament_id: str) -> bool:
        """Verify that an arena tournament exists."""
        url = f"{self.BASE_URL}/tournament/{tournament_id}"
        try:
            response = self.session.get(url, timeout=10)
            return response.status_code == 200
        except requests.exceptions.RequestException:
            return False

    def fetch_tournament_games(self, tournament_id: str) -> Optional[List[str]]:
        """
        Fetch every game of an arena tournament.

        Args:
            tournament_id: Lichess arena id (e.g. "s85bimdN")

        Returns:
            PGN strings in the order Lichess returns them, or None if the
            download failed
        """
        url = f"{self.BASE_URL}/tournament/{tournament_id}/games"
        params = {
            'pgnInJson': 'true',
            'clocks': 'false',
            'evals': 'false',
        }

        print(f"Fetching games for tournament {tournament_id}...")
        response_text = self._make_request(url, params)

        if response_text is None:
            return None

        # Parse NDJSON response (newline-delimited JSON)
        pgns = []
        skipped_no_pgn = 0

        for line in response_text.strip().split('\n'):
            if not line.strip():
                continue
            try:
                game_data = json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning(f"Failed to parse game JSON: {e}")
                continue
            pgn = game_data.get('pgn', '')
            if pgn:
                pgns.append(pgn.strip())
            else:
                skipped_no_pgn += 1
                logger.warning(f"Game {game_data.get('id', '?')} has no PGN")

        if skipped_no_pgn > 0:
            logger.info(f"Skipped {skipped_no_pgn} games without PGN for tournament {tournament_id}")

        print(f"Fetched {len(pgns)} games for tournament {tournament_id}")
        return pgns
