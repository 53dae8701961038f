#!/usr/bin/env python3
"""
Tests for ProfileEventPublisher and the profile-created task.

Usage:
    python -m pytest tests/unit/notification/test_service.py -v
"""

import contextlib
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock, patch

import pytest

from core.config_loader import AppConfig
from core.preferences import PreferenceRecord
from database.repositories import NotificationRepository, PreferenceRepository, ProfileRepository
from database.uow import MatchingRepositories
from notification import ProfileEventPublisher, process_profile_created_task, cleanup_old_notifications_task


class TestProfileEventPublisher(unittest.TestCase):

    def test_sync_mode_when_queue_disabled(self):
        publisher = ProfileEventPublisher(use_async_queue=False)
        self.assertFalse(publisher.async_mode)
        self.assertEqual(publisher.get_queue_status(), {'status': 'sync_mode', 'queue_length': 0})

    @patch('notification.service.Redis')
    def test_falls_back_to_sync_when_redis_unreachable(self, mock_redis):
        mock_redis.from_url.return_value.ping.side_effect = ConnectionError('refused')
        publisher = ProfileEventPublisher(redis_url='redis://nowhere:6379/0')
        self.assertFalse(publisher.async_mode)

    @patch('notification.service.process_profile_created_task')
    def test_sync_publish_runs_task_inline(self, mock_task):
        publisher = ProfileEventPublisher(use_async_queue=False)
        result = publisher.publish_profile_created('abc')
        mock_task.assert_called_once_with('abc')
        self.assertEqual(result, 'abc')

    @patch('notification.service.process_profile_created_task')
    def test_publish_never_raises(self, mock_task):
        mock_task.side_effect = RuntimeError('fanout exploded')
        publisher = ProfileEventPublisher(use_async_queue=False)
        self.assertIsNone(publisher.publish_profile_created('abc'))

    @patch('notification.service.process_profile_created_task')
    def test_disabled_publisher_drops_events(self, mock_task):
        publisher = ProfileEventPublisher(use_async_queue=False, enabled=False)
        self.assertIsNone(publisher.publish_profile_created('abc'))
        mock_task.assert_not_called()

    @patch('notification.service.Queue')
    @patch('notification.service.Redis')
    def test_async_publish_enqueues_with_retry(self, mock_redis, mock_queue):
        mock_queue.return_value.enqueue.return_value = Mock(id='job-1')

        publisher = ProfileEventPublisher(redis_url='redis://localhost:6379/0', queue_name='matching')
        job_id = publisher.publish_profile_created('abc')

        self.assertTrue(publisher.async_mode)
        self.assertEqual(job_id, 'job-1')
        mock_queue.assert_called_once_with('matching', connection=mock_redis.from_url.return_value)
        args, kwargs = mock_queue.return_value.enqueue.call_args
        self.assertIs(args[0], process_profile_created_task)
        self.assertEqual(args[1], 'abc')
        self.assertEqual(kwargs['retry'].max, 3)

    @patch('notification.service.Queue')
    @patch('notification.service.Redis')
    def test_enqueue_failure_is_swallowed(self, mock_redis, mock_queue):
        mock_queue.return_value.enqueue.side_effect = ConnectionError('lost redis')
        publisher = ProfileEventPublisher()
        self.assertIsNone(publisher.publish_profile_created('abc'))


@pytest.mark.db
class TestProcessProfileCreatedTask:

    @pytest.fixture
    def patched_uows(self, session_factory, uow_factory):
        @contextlib.contextmanager
        def _matching_uow():
            session = session_factory()
            try:
                yield MatchingRepositories.for_session(session)
                session.commit()
            finally:
                session.close()

        with patch('notification.service.matching_uow', _matching_uow), \
                patch('notification.dispatcher.notification_uow', uow_factory):
            yield

    def _seed(self, db_session):
        profiles = ProfileRepository(db_session)
        preferences = PreferenceRepository(db_session)

        newcomer = profiles.create('newcomer', {'first_name': 'Asha', 'age': 29,
                                                'current_address': {'city': 'Pune'}})
        preferences.upsert('alice', PreferenceRecord.model_validate({
            'preferredCities': ['Pune'], 'preferredAgeRange': {'min': 25, 'max': 35}
        }).model_dump(mode='json'))
        preferences.upsert('bob', PreferenceRecord.model_validate({
            'preferredCities': ['Delhi']
        }).model_dump(mode='json'))
        preferences.upsert('newcomer', PreferenceRecord.model_validate({
            'preferredCities': ['Pune']
        }).model_dump(mode='json'))
        db_session.commit()
        return newcomer

    def test_notifies_interested_users_only(self, patched_uows, db_session):
        newcomer = self._seed(db_session)

        result = process_profile_created_task(str(newcomer.id))

        assert result['interested'] == 1
        assert result['delivered'] == 1
        repo = NotificationRepository(db_session)
        assert repo.unread_count('alice') == 1
        assert repo.unread_count('bob') == 0
        assert repo.unread_count('newcomer') == 0

    def test_missing_profile_is_a_no_op(self, patched_uows):
        result = process_profile_created_task('00000000-0000-0000-0000-000000000000')
        assert result['interested'] == 0


@pytest.mark.db
class TestCleanupOldNotificationsTask:

    def _seed(self, session_factory, ages_in_days):
        session = session_factory()
        repo = NotificationRepository(session)
        now = datetime.now(timezone.utc)
        for age in ages_in_days:
            notification = repo.create(recipient_id='alice', type='match', title='Match', message='m')
            notification.created_at = now - timedelta(days=age)
        session.commit()
        repo.mark_read('alice')
        session.commit()
        session.close()

    def test_deletes_read_notifications_past_retention(self, session_factory, uow_factory):
        self._seed(session_factory, [1, 10, 40])

        with patch('notification.service.notification_uow', uow_factory):
            assert cleanup_old_notifications_task(30) == 1
            assert cleanup_old_notifications_task(5) == 1

        session = session_factory()
        _, total = NotificationRepository(session).list_for_recipient('alice')
        session.close()
        assert total == 1

    def test_defaults_to_configured_retention(self, session_factory, uow_factory):
        self._seed(session_factory, [1, 10])
        config = AppConfig.model_validate({'notifications': {'retention_days': 7}})

        with patch('notification.service.notification_uow', uow_factory), \
                patch('notification.service.get_config', return_value=config):
            assert cleanup_old_notifications_task() == 1
