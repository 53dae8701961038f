#!/usr/bin/env python3
"""
Delete read notifications past the retention period.

Meant to run on a schedule (cron, or an RQ scheduler job calling
cleanup_old_notifications_task).

Usage:
    python -m notification.cleanup
    python -m notification.cleanup --days 7
"""

import sys
import argparse
import logging

from notification import cleanup_old_notifications_task

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description='Delete old read notifications')
    parser.add_argument('--days', type=int, default=None,
                        help='Age in days (default: notifications.retention_days)')

    args = parser.parse_args()

    if args.days is not None and args.days < 1:
        parser.error('--days must be at least 1')

    try:
        deleted = cleanup_old_notifications_task(args.days)
    except Exception as e:
        logger.error(f"Cleanup failed: {e}")
        sys.exit(1)

    logger.info(f"Cleanup finished: {deleted} notifications deleted")


if __name__ == '__main__':
    main()
