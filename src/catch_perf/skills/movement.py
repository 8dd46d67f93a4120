"""Movement skill - strain from moving the catcher between pickups."""

import math

from catch_perf.models.difficulty import NORMALIZED_HITOBJECT_RADIUS, DifficultyEvent
from catch_perf.skills.base import StrainDecaySkill


class Movement(StrainDecaySkill):
    """Represents the difficulty of moving the catcher to each pickup.

    Movement is measured from where the player can actually be rather than
    from the previous pickup: the player only has to get within
    ``NORMALIZED_HITOBJECT_RADIUS - ABSOLUTE_PLAYER_POSITIONING_ERROR`` of a
    pickup to catch it. Direction changes, streams and edge dashes (walks
    that barely avoid needing a hyperdash) receive bonuses.
    """

    ABSOLUTE_PLAYER_POSITIONING_ERROR = 16.0
    DIRECTION_CHANGE_BONUS = 21.0
    EDGE_DASH_BONUS = 5.7

    def __init__(
        self,
        half_catcher_width: float,
        clock_rate: float = 1.0,
        section_length: float = 750.0,
        decay_weight: float = 0.94,
        strain_decay_base: float = 0.2,
        skill_multiplier: float = 900.0,
    ) -> None:
        super().__init__(
            section_length=section_length,
            decay_weight=decay_weight,
            strain_decay_base=strain_decay_base,
            skill_multiplier=skill_multiplier,
        )
        self.half_catcher_width = half_catcher_width

        # Edge dashes are easier at higher rates
        self.catcher_speed_multiplier = clock_rate

        self._last_player_position: float | None = None
        self._last_distance_moved = 0.0
        self._last_strain_time = 0.0

    def strain_value_of(self, event: DifficultyEvent) -> float:
        if self._last_player_position is None:
            self._last_player_position = event.last_normalized_position

        reach = NORMALIZED_HITOBJECT_RADIUS - self.ABSOLUTE_PLAYER_POSITIONING_ERROR
        player_position = min(
            max(self._last_player_position, event.normalized_position - reach),
            event.normalized_position + reach,
        )
        distance_moved = player_position - self._last_player_position

        weighted_strain_time = event.strain_time + 13 + (3 / self.catcher_speed_multiplier)

        distance_addition = abs(distance_moved) ** 1.3 / 510
        sqrt_strain = math.sqrt(weighted_strain_time)

        if abs(distance_moved) > 0.1:
            if (
                abs(self._last_distance_moved) > 0.1
                and math.copysign(1, distance_moved) != math.copysign(1, self._last_distance_moved)
            ):
                bonus_factor = min(50, abs(distance_moved)) / 50
                antiflow_factor = max(min(70, abs(self._last_distance_moved)) / 70, 0.38)

                distance_addition += (
                    self.DIRECTION_CHANGE_BONUS
                    / math.sqrt(self._last_strain_time + 16)
                    * bonus_factor
                    * antiflow_factor
                    * max(1 - (weighted_strain_time / 1000) ** 3, 0)
                )

            # Base bonus for every movement, giving some weight to streams
            distance_addition += (
                12.5
                * min(abs(distance_moved), NORMALIZED_HITOBJECT_RADIUS * 2)
                / (NORMALIZED_HITOBJECT_RADIUS * 6)
                / sqrt_strain
            )

        if event.last.distance_to_hyper_dash <= 20.0:
            edge_dash_bonus = 0.0
            if not event.last.hyper_dash:
                edge_dash_bonus += self.EDGE_DASH_BONUS
            else:
                # A hyperdash always lands the catcher on the pickup
                player_position = event.normalized_position

            distance_addition *= 1.0 + edge_dash_bonus * (
                (20 - event.last.distance_to_hyper_dash) / 20
            ) * (min(event.strain_time * self.catcher_speed_multiplier, 265) / 265) ** 1.5

        self._last_player_position = player_position
        self._last_distance_moved = distance_moved
        self._last_strain_time = event.strain_time

        return distance_addition / weighted_strain_time
