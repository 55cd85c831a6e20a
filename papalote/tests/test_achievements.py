# -*- coding: utf-8 -*-
"""
Tests de logros: cálculo de progreso, métricas, resumen e import/export.
"""
import json

import pytest

from papalote.constants.achievements import (
    STORAGE_VERSION,
    get_achievement_by_id,
    get_achievements_by_user_type,
)
from papalote.models.entities import AchievementTier
from papalote.services.achievement_service import (
    calculate_progress,
    celebration_type,
    round_half_up,
)


@pytest.fixture
def achievements(container):
    return container.achievement_service


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2


@pytest.mark.parametrize('current, target, lower, expected', [
    (5, 10, False, 50),
    (1, 3, False, 33),
    (2, 3, False, 67),
    (15, 10, False, 100),
    (-1, 10, False, 0),
    (0, 0, False, 100),
    (0, 1, True, 0),
    (0, 24, True, 0),
    (0, 0, True, 100),
    (0.5, 1, True, 100),
    (1, 1, True, 100),
    (2, 1, True, 50),
    (48, 24, True, 50),
])
def test_calculate_progress(current, target, lower, expected):
    assert calculate_progress(current, target, lower) == expected


def test_celebration_type():
    assert celebration_type(AchievementTier.BRONZE) == 'toast'
    assert celebration_type(AchievementTier.SILVER) == 'toast'
    assert celebration_type(AchievementTier.GOLD) == 'modal'
    assert celebration_type(AchievementTier.PLATINUM) == 'modal'


def test_definitions():
    definition = get_achievement_by_id('b-big-spender')
    assert definition.hidden is True
    assert definition.rarity == 'rare'
    assert definition.criteria.is_numeric
    assert not get_achievement_by_id('s-story').criteria.is_numeric
    assert get_achievement_by_id('nope') is None


def test_track_metric_unlocks_once(achievements):
    events = achievements.track_metric('seller-1', 'seller', 'products_count', 10)
    assert [e['achievement']['id'] for e in events] == ['s-products-10']
    assert events[0]['celebration_type'] == 'toast'

    assert achievements.track_metric('seller-1', 'seller', 'products_count', 12) == []
    assert achievements.is_unlocked('seller-1', 'seller', 's-products-10')

    summary = achievements.get_summary('seller-1', 'seller')
    by_id = {a['id']: a for a in summary['achievements']}
    assert by_id['s-products-50']['status'] == 'in_progress'
    assert by_id['s-products-50']['progress'] == 24
    assert summary['total_unlocked'] == 1
    assert summary['unseen_count'] == 1


def test_lower_is_better_metrics(achievements):
    fast = achievements.track_metric('seller-2', 'seller', 'response_time_hours', 0.5)
    assert [e['achievement']['id'] for e in fast] == ['s-fast-responder']

    achievements.track_metric('seller-2', 'seller', 'shipping_time_hours', 48)
    summary = achievements.get_summary('seller-2', 'seller')
    speed = next(a for a in summary['achievements'] if a['id'] == 's-speed-demon')
    assert speed['progress'] == 50


def test_response_time_zero_is_not_measured(achievements):
    assert achievements.track_metric('seller-4', 'seller', 'response_time_hours', 0) == []
    assert not achievements.is_unlocked('seller-4', 'seller', 's-fast-responder')

    summary = achievements.get_summary('seller-4', 'seller')
    fast = next(a for a in summary['achievements'] if a['id'] == 's-fast-responder')
    assert fast['progress'] == 0

    events = achievements.track_metric('seller-4', 'seller', 'response_time_hours', 1)
    assert [e['achievement']['id'] for e in events] == ['s-fast-responder']


def test_zero_returns_requires_min_sales(achievements):
    assert achievements.track_metric('seller-5', 'seller', 'return_rate', 0) == []
    assert not achievements.is_unlocked('seller-5', 'seller', 's-zero-returns')

    achievements.track_metric('seller-5', 'seller', 'sales_count', 49)
    assert achievements.track_metric('seller-5', 'seller', 'return_rate', 0) == []

    achievements.track_metric('seller-5', 'seller', 'sales_count', 50)
    events = achievements.track_metric('seller-5', 'seller', 'return_rate', 0)
    assert [e['achievement']['id'] for e in events] == ['s-zero-returns']
    assert events[0]['celebration_type'] == 'modal'


def test_award_status_achievement_once(achievements):
    events = achievements.award('seller-6', 'seller', 's-story')
    assert [e['achievement']['id'] for e in events] == ['s-story']
    assert achievements.award('seller-6', 'seller', 's-story') == []
    assert achievements.award('seller-6', 'buyer', 's-story') == []
    assert achievements.award('seller-6', 'seller', 'nope') == []


def test_seen_and_share(achievements):
    achievements.track_metric('buyer-1', 'buyer', 'orders_count', 1)
    assert achievements.get_unseen_count('buyer-1', 'buyer') == 1

    achievements.mark_all_as_seen('buyer-1', 'buyer')
    assert achievements.get_unseen_count('buyer-1', 'buyer') == 0

    achievements.record_share('buyer-1', 'buyer', 'b-first-purchase')
    record = achievements.record_share('buyer-1', 'buyer', 'b-first-purchase')
    assert record['share_count'] == 2
    assert record['shared_at']


def test_summary_for_new_user(achievements):
    summary = achievements.get_summary('nuevo', 'buyer')
    assert summary['total_unlocked'] == 0
    assert summary['total_available'] == len(get_achievements_by_user_type('buyer'))
    assert summary['recent_unlocks'] == []
    assert len(summary['next_to_unlock']) == 3
    assert summary['tier_stats']['gold']['unlocked'] == 0
    assert 'getting_started' in summary['categories']


def test_summary_stats_and_rewards(achievements):
    achievements.track_metric('buyer-3', 'buyer', 'referrals_count', 5)
    summary = achievements.get_summary('buyer-3', 'buyer')
    assert summary['total_unlocked'] == 2
    assert summary['category_stats']['social']['unlocked'] == 2
    assert summary['tier_stats']['bronze']['unlocked'] == 1
    assert summary['tier_stats']['silver']['unlocked'] == 1
    assert [r['type'] for r in summary['rewards_earned']] == ['credit']
    assert summary['next_to_unlock'][0]['id'] == 'b-referral-10'


def test_export_import(achievements):
    assert achievements.export_data('buyer-1', 'buyer') is None

    achievements.unlock_achievement('buyer-1', 'buyer', 'b-first-review')
    exported = achievements.export_data('buyer-1', 'buyer')
    data = json.loads(exported)
    assert data['version'] == STORAGE_VERSION
    assert 'b-first-review' in data['achievements']

    assert achievements.import_data('buyer-2', 'buyer', exported)
    assert achievements.is_unlocked('buyer-2', 'buyer', 'b-first-review')
    assert achievements.get_storage_data('buyer-2', 'buyer')['user_id'] == 'buyer-2'

    assert achievements.import_data('buyer-2', 'buyer', '{no es json') is False
    assert achievements.import_data('buyer-2', 'buyer', json.dumps({'achievements': []})) is False


def test_old_version_is_migrated(container, achievements):
    container.achievement_repo.save('buyer', 'viejo', {'achievements': {}, 'version': 0})
    assert achievements.get_storage_data('viejo', 'buyer')['version'] == STORAGE_VERSION

    container.achievement_repo.save('buyer', 'roto', {'achievements': 'x'})
    assert achievements.get_storage_data('roto', 'buyer') is None


def test_clear_data(achievements):
    achievements.unlock_achievement('buyer-1', 'buyer', 'b-first-review')
    assert achievements.clear_data('buyer-1', 'buyer') is True
    assert achievements.get_storage_data('buyer-1', 'buyer') is None
