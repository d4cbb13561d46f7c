# ============================================================================
# FILE: tunedash/storage/database.py
# SQLAlchemy store: one transaction per operation, rollback and re-raise on error
# ============================================================================
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from tunedash.core.clock import utcnow
from tunedash.db.base import Base
from tunedash.db.models.analytics import Analytics as AnalyticsRow
from tunedash.db.models.playlist import Playlist as PlaylistRow
from tunedash.db.models.playlist import PlaylistTrack as PlaylistTrackRow
from tunedash.db.models.track import Track as TrackRow
from tunedash.db.models.user import User as UserRow
from tunedash.db.session import make_engine, make_session_factory
from tunedash.schemas.analytics import AnalyticsEvent
from tunedash.schemas.playlist import Playlist, PlaylistCreate, PlaylistTrack
from tunedash.schemas.track import Track, TrackCreate
from tunedash.schemas.user import User
from tunedash.storage.base import Storage, mergeable

logger = logging.getLogger(__name__)

def _new_id() -> str:
    return str(uuid.uuid4())

class DatabaseStorage(Storage):
    """Store backed by any SQLAlchemy database URL."""

    def __init__(self, database_url: str, clock: Callable[[], datetime] = utcnow):
        self.clock = clock
        self.engine = make_engine(database_url)
        self.SessionLocal = make_session_factory(self.engine)
        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database storage ready: {self.engine.url.render_as_string(hide_password=True)}")

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Database error, transaction rolled back: {e}")
            raise
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()

    # User operations

    def get_user(self, user_id: str) -> Optional[User]:
        with self.session() as db:
            row = db.get(UserRow, user_id)
            return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self.session() as db:
            row = db.scalars(select(UserRow).where(UserRow.username == username)).first()
            return User.model_validate(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self.session() as db:
            row = db.scalars(select(UserRow).where(UserRow.email == email)).first()
            return User.model_validate(row) if row else None

    def create_user(self, username: str, email: str, password: str,
                    artist_name: Optional[str] = None) -> User:
        with self.session() as db:
            row = UserRow(
                id=_new_id(),
                username=username,
                email=email,
                password=password,
                artist_name=artist_name or None,
                created_at=self.clock(),
            )
            db.add(row)
            db.flush()
            return User.model_validate(row)

    # Track operations

    def get_track(self, track_id: str) -> Optional[Track]:
        with self.session() as db:
            row = db.get(TrackRow, track_id)
            return Track.model_validate(row) if row else None

    def get_tracks_by_user(self, user_id: str) -> List[Track]:
        with self.session() as db:
            rows = db.scalars(select(TrackRow).where(TrackRow.user_id == user_id)).all()
            return [Track.model_validate(row) for row in rows]

    def create_track(self, user_id: str, track_data: TrackCreate) -> Track:
        with self.session() as db:
            row = TrackRow(
                **track_data.model_dump(),
                id=_new_id(),
                user_id=user_id,
                plays=0,
                created_at=self.clock(),
            )
            db.add(row)
            db.flush()
            return Track.model_validate(row)

    def update_track(self, track_id: str, updates: Dict[str, Any]) -> Optional[Track]:
        with self.session() as db:
            row = db.get(TrackRow, track_id)
            if row is None:
                return None
            for key, value in mergeable(updates).items():
                setattr(row, key, value)
            db.flush()
            if "duration" in updates:
                for playlist_id in self._playlists_holding(db, track_id):
                    self._sync_playlist(db, playlist_id)
            return Track.model_validate(row)

    def delete_track(self, track_id: str) -> bool:
        with self.session() as db:
            row = db.get(TrackRow, track_id)
            if row is None:
                return False
            affected = self._playlists_holding(db, track_id)
            for entry in db.scalars(select(PlaylistTrackRow).where(PlaylistTrackRow.track_id == track_id)).all():
                db.delete(entry)
            db.delete(row)
            db.flush()
            for playlist_id in affected:
                self._sync_playlist(db, playlist_id)
            return True

    # Playlist operations

    def get_playlist(self, playlist_id: str) -> Optional[Playlist]:
        with self.session() as db:
            row = db.get(PlaylistRow, playlist_id)
            return Playlist.model_validate(row) if row else None

    def get_playlists_by_user(self, user_id: str) -> List[Playlist]:
        with self.session() as db:
            rows = db.scalars(select(PlaylistRow).where(PlaylistRow.user_id == user_id)).all()
            return [Playlist.model_validate(row) for row in rows]

    def create_playlist(self, user_id: str, playlist_data: PlaylistCreate) -> Playlist:
        with self.session() as db:
            row = PlaylistRow(
                id=_new_id(),
                user_id=user_id,
                title=playlist_data.title,
                description=playlist_data.description or None,
                cover_url=playlist_data.cover_url or None,
                track_count=0,
                total_duration=0,
                plays=0,
                is_public=True if playlist_data.is_public is None else playlist_data.is_public,
                created_at=self.clock(),
            )
            db.add(row)
            db.flush()
            return Playlist.model_validate(row)

    def update_playlist(self, playlist_id: str, updates: Dict[str, Any]) -> Optional[Playlist]:
        with self.session() as db:
            row = db.get(PlaylistRow, playlist_id)
            if row is None:
                return None
            for key, value in mergeable(updates).items():
                setattr(row, key, value)
            db.flush()
            return Playlist.model_validate(row)

    def delete_playlist(self, playlist_id: str) -> bool:
        with self.session() as db:
            row = db.get(PlaylistRow, playlist_id)
            if row is None:
                return False
            db.delete(row)  # Memberships go with it (delete-orphan)
            return True

    def get_playlist_tracks(self, playlist_id: str) -> List[PlaylistTrack]:
        with self.session() as db:
            rows = db.scalars(
                select(PlaylistTrackRow)
                .where(PlaylistTrackRow.playlist_id == playlist_id)
                .order_by(PlaylistTrackRow.position)
            ).all()
            return [PlaylistTrack.model_validate(row) for row in rows]

    def add_track_to_playlist(self, playlist_id: str, track_id: str) -> Optional[PlaylistTrack]:
        with self.session() as db:
            if db.get(PlaylistRow, playlist_id) is None or db.get(TrackRow, track_id) is None:
                return None

            existing = db.scalars(
                select(PlaylistTrackRow).where(
                    PlaylistTrackRow.playlist_id == playlist_id,
                    PlaylistTrackRow.track_id == track_id,
                )
            ).first()
            if existing:
                return PlaylistTrack.model_validate(existing)

            last_position = db.scalar(
                select(func.max(PlaylistTrackRow.position)).where(PlaylistTrackRow.playlist_id == playlist_id)
            )
            entry = PlaylistTrackRow(
                id=_new_id(),
                playlist_id=playlist_id,
                track_id=track_id,
                position=0 if last_position is None else last_position + 1,
                added_at=self.clock(),
            )
            db.add(entry)
            db.flush()
            self._sync_playlist(db, playlist_id)
            return PlaylistTrack.model_validate(entry)

    def remove_track_from_playlist(self, playlist_id: str, track_id: str) -> bool:
        with self.session() as db:
            entry = db.scalars(
                select(PlaylistTrackRow).where(
                    PlaylistTrackRow.playlist_id == playlist_id,
                    PlaylistTrackRow.track_id == track_id,
                )
            ).first()
            if entry is None:
                return False
            db.delete(entry)
            db.flush()
            self._sync_playlist(db, playlist_id)
            return True

    @staticmethod
    def _playlists_holding(db: Session, track_id: str) -> List[str]:
        return list(db.scalars(
            select(PlaylistTrackRow.playlist_id).where(PlaylistTrackRow.track_id == track_id).distinct()
        ))

    @staticmethod
    def _sync_playlist(db: Session, playlist_id: str) -> None:
        """Recompute the denormalized track_count/total_duration inside the current transaction."""
        playlist = db.get(PlaylistRow, playlist_id)
        if playlist is None:
            return
        count, total = db.execute(
            select(func.count(PlaylistTrackRow.id), func.coalesce(func.sum(TrackRow.duration), 0))
            .select_from(PlaylistTrackRow)
            .join(TrackRow, TrackRow.id == PlaylistTrackRow.track_id)
            .where(PlaylistTrackRow.playlist_id == playlist_id)
        ).one()
        playlist.track_count = count
        playlist.total_duration = total
        db.flush()

    # Analytics operations

    def get_user_analytics(self, user_id: str, days: int = 30) -> List[AnalyticsEvent]:
        now = self.clock()
        cutoff = now - timedelta(days=days)
        with self.session() as db:
            rows = db.scalars(
                select(AnalyticsRow).where(
                    AnalyticsRow.user_id == user_id,
                    AnalyticsRow.date >= cutoff,
                    AnalyticsRow.date <= now,
                )
            ).all()
            return [AnalyticsEvent.model_validate(row) for row in rows]

    def create_analytics_event(self, user_id: str, track_id: Optional[str] = None,
                               playlist_id: Optional[str] = None, plays: int = 0,
                               revenue: float = 0.0,
                               date: Optional[datetime] = None) -> AnalyticsEvent:
        with self.session() as db:
            row = self._append_event(db, user_id, track_id, playlist_id, plays, revenue, date)
            return AnalyticsEvent.model_validate(row)

    def _append_event(self, db: Session, user_id: str, track_id: Optional[str],
                      playlist_id: Optional[str], plays: int, revenue: float,
                      date: Optional[datetime] = None) -> AnalyticsRow:
        row = AnalyticsRow(
            id=_new_id(),
            user_id=user_id,
            track_id=track_id,
            playlist_id=playlist_id,
            date=date or self.clock(),
            plays=plays,
            revenue=revenue,
        )
        db.add(row)
        db.flush()
        return row

    def increment_track_plays(self, track_id: str) -> Optional[Track]:
        with self.session() as db:
            # Counter is bumped by the database itself, never read-modify-write here
            result = db.execute(
                update(TrackRow)
                .where(TrackRow.id == track_id)
                .values(plays=func.coalesce(TrackRow.plays, 0) + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            row = db.get(TrackRow, track_id)
            db.refresh(row)
            self._append_event(db, row.user_id, track_id, None, 1, 0.0)
            return Track.model_validate(row)

    def increment_playlist_plays(self, playlist_id: str) -> Optional[Playlist]:
        with self.session() as db:
            result = db.execute(
                update(PlaylistRow)
                .where(PlaylistRow.id == playlist_id)
                .values(plays=func.coalesce(PlaylistRow.plays, 0) + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            row = db.get(PlaylistRow, playlist_id)
            db.refresh(row)
            self._append_event(db, row.user_id, None, playlist_id, 1, 0.0)
            return Playlist.model_validate(row)
