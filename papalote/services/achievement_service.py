# ==============================================================================
# SERVICIO DE LOGROS
# ==============================================================================
# Progreso de logros por usuario (comprador o vendedor). Cada usuario tiene
# un blob {user_id, user_type, achievements: {id: datos}, last_synced,
# version} guardado bajo papalote_achievements_<tipo>_<userId>.
# ==============================================================================

import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from papalote.constants.achievements import (
    LOWER_IS_BETTER,
    STORAGE_VERSION,
    get_achievement_by_id,
    get_achievements_by_user_type,
    get_categories,
)
from papalote.errors import StorageError, log_error
from papalote.models.entities import (
    AchievementDefinition,
    AchievementStatus,
    AchievementTier,
    UserAchievementData,
    UserType,
)
from papalote.repositories.interfaces import IAchievementRepository

logger = logging.getLogger(__name__)

VALID_USER_TYPES = (UserType.BUYER.value, UserType.SELLER.value)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def round_half_up(value: float) -> int:
    """Redondeo .5 hacia arriba (el round() de Python redondea al par)."""
    return int(math.floor(value + 0.5))


def calculate_progress(current: float, target: float, lower_is_better: bool = False) -> int:
    """
    Porcentaje de avance 0-100.

    Para métricas donde menor es mejor, alcanzar o bajar del objetivo es
    100; por encima se escala target/current. Con objetivo positivo, un
    valor en 0 significa que aún no hay medición y cuenta como 0.
    """
    if lower_is_better:
        if target > 0 and current <= 0:
            return 0
        if current <= target:
            return 100
        return min(100, round_half_up(target / current * 100))
    if target <= 0:
        return 100 if current >= target else 0
    return max(0, min(100, round_half_up(current / target * 100)))


def status_for_progress(progress: int) -> AchievementStatus:
    if progress >= 100:
        return AchievementStatus.UNLOCKED
    if progress > 0:
        return AchievementStatus.IN_PROGRESS
    return AchievementStatus.LOCKED


def celebration_type(tier: AchievementTier) -> str:
    """Oro y platino se celebran con modal; los demás con toast."""
    return 'modal' if tier in (AchievementTier.GOLD, AchievementTier.PLATINUM) else 'toast'


class AchievementService:
    """
    Servicio de logros.

    Las lecturas fallidas devuelven None / valores vacíos y las escrituras
    fallidas se registran en el log sin propagar la excepción.
    """

    def __init__(self, achievement_repo: IAchievementRepository):
        self.repo = achievement_repo

    # =========================================================================
    # Almacenamiento
    # =========================================================================

    def get_storage_data(self, user_id: str, user_type: str) -> Optional[Dict[str, Any]]:
        """
        Blob de logros del usuario.

        Returns:
            Dict con achievements, last_synced y version, o None si no hay datos
        """
        data = self.repo.load(user_type, user_id)
        if not data:
            return None
        if not isinstance(data.get('achievements'), dict):
            logger.warning("[logros] Datos inválidos para %s_%s", user_type, user_id)
            return None
        if data.get('version') != STORAGE_VERSION:
            return self.migrate_data(data)
        return data

    @staticmethod
    def migrate_data(data: Dict[str, Any]) -> Dict[str, Any]:
        """Sin migraciones de formato todavía: solo actualiza la versión."""
        migrated = dict(data)
        migrated['version'] = STORAGE_VERSION
        return migrated

    def save_storage_data(self, user_id: str, user_type: str, achievements: Dict[str, Dict[str, Any]]) -> bool:
        data = {
            'user_id': user_id,
            'user_type': user_type,
            'achievements': achievements,
            'last_synced': _now(),
            'version': STORAGE_VERSION,
        }
        try:
            self.repo.save(user_type, user_id, data)
        except StorageError as e:
            log_error('logros', e, op='save', user=f'{user_type}_{user_id}')
            return False
        return True

    def _achievements(self, user_id: str, user_type: str) -> Dict[str, Dict[str, Any]]:
        data = self.get_storage_data(user_id, user_type)
        return dict(data['achievements']) if data else {}

    def update_achievement(
        self, user_id: str, user_type: str, achievement_id: str, updates: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Aplica cambios a un logro (lo crea bloqueado si no existía).

        Returns:
            Datos del logro después del cambio
        """
        achievements = self._achievements(user_id, user_type)
        existing = achievements.get(achievement_id) or UserAchievementData(id=achievement_id).to_dict()
        record = dict(existing)
        record.update(updates)
        achievements[achievement_id] = record
        self.save_storage_data(user_id, user_type, achievements)
        return record

    def mark_as_seen(self, user_id: str, user_type: str, achievement_id: str) -> None:
        self.update_achievement(user_id, user_type, achievement_id, {'seen': True})

    def mark_all_as_seen(self, user_id: str, user_type: str) -> None:
        data = self.get_storage_data(user_id, user_type)
        if not data:
            return
        achievements = {k: dict(v, seen=True) for k, v in data['achievements'].items()}
        self.save_storage_data(user_id, user_type, achievements)

    def record_share(self, user_id: str, user_type: str, achievement_id: str) -> Dict[str, Any]:
        existing = self._achievements(user_id, user_type).get(achievement_id) or {}
        return self.update_achievement(user_id, user_type, achievement_id, {
            'shared_at': _now(),
            'share_count': (existing.get('share_count') or 0) + 1,
        })

    def get_unseen_count(self, user_id: str, user_type: str) -> int:
        return sum(
            1 for a in self._achievements(user_id, user_type).values()
            if a.get('status') == AchievementStatus.UNLOCKED.value and not a.get('seen')
        )

    def is_unlocked(self, user_id: str, user_type: str, achievement_id: str) -> bool:
        record = self._achievements(user_id, user_type).get(achievement_id) or {}
        return record.get('status') == AchievementStatus.UNLOCKED.value

    def get_unlocked_ids(self, user_id: str, user_type: str) -> List[str]:
        return [
            a.get('id', key) for key, a in self._achievements(user_id, user_type).items()
            if a.get('status') == AchievementStatus.UNLOCKED.value
        ]

    def unlock_achievement(self, user_id: str, user_type: str, achievement_id: str) -> Dict[str, Any]:
        return self.update_achievement(user_id, user_type, achievement_id, {
            'status': AchievementStatus.UNLOCKED.value,
            'progress': 100,
            'unlocked_at': _now(),
            'seen': False,
        })

    def award(self, user_id: str, user_type: str, achievement_id: str) -> List[Dict[str, Any]]:
        """
        Desbloquea un logro de estado (ej. historia publicada).

        Returns:
            Lista con el evento de desbloqueo, vacía si ya estaba desbloqueado
        """
        definition = get_achievement_by_id(achievement_id)
        if definition is None or definition.user_type.value != user_type:
            return []
        if self.is_unlocked(user_id, user_type, achievement_id):
            return []
        record = self.unlock_achievement(user_id, user_type, achievement_id)
        logger.info("[logros] %s_%s desbloqueó %s", user_type, user_id, achievement_id)
        return [{
            'achievement': definition.to_dict(),
            'unlocked_at': record['unlocked_at'],
            'celebration_type': celebration_type(definition.tier),
        }]

    def update_progress(
        self,
        user_id: str,
        user_type: str,
        achievement_id: str,
        current_value: float,
        target_value: float,
        lower_is_better: bool = False,
    ) -> Dict[str, Any]:
        """
        Recalcula el avance de un logro.

        Al llegar a 100% queda desbloqueado y marcado como no visto.

        Returns:
            Datos del logro actualizados
        """
        progress = calculate_progress(current_value, target_value, lower_is_better)
        status = status_for_progress(progress)
        updates: Dict[str, Any] = {
            'current_value': current_value,
            'progress': progress,
            'status': status.value,
        }
        if status == AchievementStatus.UNLOCKED:
            updates['unlocked_at'] = _now()
            updates['seen'] = False
        return self.update_achievement(user_id, user_type, achievement_id, updates)

    def clear_data(self, user_id: str, user_type: str) -> bool:
        try:
            return self.repo.remove(user_type, user_id)
        except StorageError as e:
            log_error('logros', e, op='clear', user=f'{user_type}_{user_id}')
            return False

    def export_data(self, user_id: str, user_type: str) -> Optional[str]:
        data = self.get_storage_data(user_id, user_type)
        if not data:
            return None
        return json.dumps(data, ensure_ascii=False)

    def import_data(self, user_id: str, user_type: str, json_data: str) -> bool:
        """
        Restaura logros desde un JSON exportado.

        El blob se reasigna al usuario actual. Se rechaza si no trae un
        objeto 'achievements'.
        """
        try:
            data = json.loads(json_data)
        except (TypeError, ValueError) as e:
            logger.warning("[logros] JSON de importación inválido: %s", e)
            return False
        if not isinstance(data, dict) or not isinstance(data.get('achievements'), dict):
            logger.warning("[logros] Estructura de importación inválida")
            return False
        return self.save_storage_data(user_id, user_type, data['achievements'])

    # =========================================================================
    # Métricas
    # =========================================================================

    def _metric_value(self, user_id: str, user_type: str, metric: str) -> float:
        """Último valor registrado de una métrica (el mayor entre sus logros)."""
        achievements = self._achievements(user_id, user_type)
        values = [
            (achievements.get(d.id) or {}).get('current_value') or 0
            for d in get_achievements_by_user_type(user_type)
            if d.criteria.metric == metric
        ]
        return max(values, default=0)

    def conditions_met(self, user_id: str, user_type: str, definition: AchievementDefinition) -> bool:
        """
        Verifica los requisitos extra del logro (ej. mínimo de ventas).

        Las ventas se toman del valor guardado para los logros de sales_count.
        """
        conditions = definition.criteria.conditions or {}
        min_sales = conditions.get('min_sales')
        if min_sales is None:
            return True
        return self._metric_value(user_id, user_type, 'sales_count') >= min_sales

    def track_metric(self, user_id: str, user_type: str, metric: str, value: float) -> List[Dict[str, Any]]:
        """
        Actualiza todos los logros numéricos que miden `metric`.

        Args:
            user_id: Usuario
            user_type: 'buyer' o 'seller'
            metric: Nombre de la métrica (ej. 'orders_count')
            value: Valor actual de la métrica

        Returns:
            Eventos de desbloqueo nuevos:
            [{'achievement', 'unlocked_at', 'celebration_type'}]
        """
        previously = set(self.get_unlocked_ids(user_id, user_type))
        events = []
        for definition in get_achievements_by_user_type(user_type):
            criteria = definition.criteria
            if criteria.metric != metric or not criteria.is_numeric:
                continue
            if definition.id in previously:
                continue
            if not self.conditions_met(user_id, user_type, definition):
                continue
            record = self.update_progress(
                user_id, user_type, definition.id, value, criteria.target_value,
                lower_is_better=metric in LOWER_IS_BETTER,
            )
            if record['status'] == AchievementStatus.UNLOCKED.value:
                events.append({
                    'achievement': definition.to_dict(),
                    'unlocked_at': record['unlocked_at'],
                    'celebration_type': celebration_type(definition.tier),
                })
        if events:
            logger.info("[logros] %s_%s desbloqueó %s", user_type, user_id,
                        ', '.join(e['achievement']['id'] for e in events))
        return events

    # =========================================================================
    # Resumen
    # =========================================================================

    def get_achievements(self, user_id: str, user_type: str) -> List[Dict[str, Any]]:
        """Definiciones combinadas con el progreso del usuario."""
        user_data = self._achievements(user_id, user_type)
        merged = []
        for definition in get_achievements_by_user_type(user_type):
            record = user_data.get(definition.id) or {}
            item = definition.to_dict()
            item.update({
                'status': record.get('status') or AchievementStatus.LOCKED.value,
                'current_value': record.get('current_value') or 0,
                'progress': record.get('progress') or 0,
                'unlocked_at': record.get('unlocked_at'),
                'seen': bool(record.get('seen', False)),
                'share_count': record.get('share_count') or 0,
            })
            merged.append(item)
        return merged

    def get_summary(self, user_id: str, user_type: str) -> Dict[str, Any]:
        """
        Resumen de logros para el perfil o el panel del vendedor.

        Returns:
            Dict con achievements, totales, recientes, siguientes por
            desbloquear, estadísticas por nivel y categoría, no vistos y
            recompensas obtenidas
        """
        achievements = self.get_achievements(user_id, user_type)
        unlocked = [a for a in achievements if a['status'] == AchievementStatus.UNLOCKED.value]
        in_progress = [a for a in achievements if a['status'] == AchievementStatus.IN_PROGRESS.value]
        locked = [a for a in achievements if a['status'] == AchievementStatus.LOCKED.value]

        tier_stats = {t.value: {'unlocked': 0, 'total': 0} for t in AchievementTier}
        category_stats: Dict[str, Dict[str, int]] = {}
        for a in achievements:
            is_unlocked = a['status'] == AchievementStatus.UNLOCKED.value
            tier_stats[a['tier']]['total'] += 1
            stats = category_stats.setdefault(a['category'], {'unlocked': 0, 'total': 0})
            stats['total'] += 1
            if is_unlocked:
                tier_stats[a['tier']]['unlocked'] += 1
                stats['unlocked'] += 1

        recent = sorted(unlocked, key=lambda a: a.get('unlocked_at') or '', reverse=True)[:5]
        next_up = sorted(in_progress + locked, key=lambda a: a['progress'], reverse=True)[:3]

        return {
            'user_id': user_id,
            'user_type': user_type,
            'achievements': achievements,
            'categories': get_categories(user_type),
            'total_unlocked': len(unlocked),
            'total_available': len(achievements),
            'recent_unlocks': recent,
            'next_to_unlock': next_up,
            'tier_stats': tier_stats,
            'category_stats': category_stats,
            'unseen_count': sum(1 for a in unlocked if not a['seen']),
            'rewards_earned': [a['reward'] for a in unlocked if a.get('reward')],
        }
