"""Tests for split candidate selection."""

from fakes import at, journey, leg, stopover

from split_ticket_mcp.services.candidates import flatten_stopovers, select_candidates


def _stops(*ids: str) -> list:
    return [stopover(stop_id, departure=at(10, i)) for i, stop_id in enumerate(ids)]


class TestTransferCandidates:
    """Candidates taken from the change points of the journey."""

    def test_single_leg_without_stopovers_has_no_candidates(self) -> None:
        direct = journey([leg("BER", "MUC", at(10), at(14))], 150)

        assert select_candidates(direct) == []

    def test_transfer_station_is_candidate(self) -> None:
        direct = journey(
            [
                leg("BER", "FRA", at(10), at(12)),
                leg("FRA", "MUC", at(13), at(15)),
            ],
            150,
        )

        candidates = select_candidates(direct)

        assert [c.station.id for c in candidates] == ["FRA"]
        assert candidates[0].is_transfer is True

    def test_transfer_candidates_capped(self) -> None:
        direct = journey(
            [
                leg("A", "B", at(8), at(9)),
                leg("B", "C", at(9, 10), at(10)),
                leg("C", "D", at(10, 10), at(11)),
                leg("D", "E", at(11, 10), at(12)),
                leg("E", "F", at(12, 10), at(13)),
            ]
        )

        candidates = select_candidates(direct)

        assert [c.station.id for c in candidates] == ["B", "C", "D"]

    def test_repeated_transfer_station_listed_once(self) -> None:
        direct = journey(
            [
                leg("A", "B", at(8), at(9)),
                leg("B", "B", at(9, 10), at(9, 20)),
                leg("B", "C", at(9, 30), at(10)),
            ]
        )

        candidates = select_candidates(direct)

        assert [c.station.id for c in candidates] == ["B"]


class TestIntermediateCandidates:
    """Candidates sampled from stopovers."""

    def test_eight_stopovers_sample_every_second_stop(self) -> None:
        stops = _stops("S0", "S1", "S2", "S3", "S4", "S5", "S6", "S7")
        direct = journey([leg("BER", "MUC", at(10), at(14), stopovers=stops)], 150)

        candidates = select_candidates(direct)

        assert [c.station.id for c in candidates] == ["S2", "S4", "S6"]
        assert all(c.is_transfer is False for c in candidates)

    def test_first_and_last_stop_never_sampled(self) -> None:
        direct = journey([leg("BER", "MUC", at(10), at(14), stopovers=_stops("S0", "S1", "S2"))])

        candidates = select_candidates(direct)

        # step=1, only index 1 satisfies 1 <= i < 2
        assert [c.station.id for c in candidates] == ["S1"]

    def test_two_stopovers_yield_nothing(self) -> None:
        direct = journey([leg("BER", "MUC", at(10), at(14), stopovers=_stops("S0", "S1"))])

        assert select_candidates(direct) == []

    def test_stopovers_flattened_across_legs(self) -> None:
        direct = journey(
            [
                leg("BER", "FRA", at(10), at(12), stopovers=_stops("BER", "X1", "X2", "FRA")),
                leg("FRA", "MUC", at(13), at(15), stopovers=_stops("FRA", "Y1", "Y2", "MUC")),
            ]
        )

        all_stops = flatten_stopovers(direct)
        candidates = select_candidates(direct)

        assert [s.stop.id for s in all_stops] == ["BER", "X1", "X2", "FRA", "FRA", "Y1", "Y2", "MUC"]
        # FRA is the transfer; sampled indices 2, 4, 6 -> X2, (FRA duplicate), Y2
        assert [(c.station.id, c.is_transfer) for c in candidates] == [
            ("FRA", True),
            ("X2", False),
            ("Y2", False),
        ]

    def test_transfers_precede_intermediate_stops(self) -> None:
        direct = journey(
            [
                leg("A", "B", at(8), at(9), stopovers=_stops("A", "P", "Q", "R", "S", "B")),
                leg("B", "C", at(9, 10), at(10)),
            ]
        )

        candidates = select_candidates(direct)

        flags = [c.is_transfer for c in candidates]
        assert flags == sorted(flags, reverse=True)
        assert candidates[0].station.id == "B"

    def test_never_more_than_three_unique_candidates(self) -> None:
        stops = _stops(*[f"S{i}" for i in range(40)])
        direct = journey(
            [
                leg("A", "B", at(8), at(9), stopovers=stops[:20]),
                leg("B", "C", at(9, 10), at(10), stopovers=stops[20:]),
            ]
        )

        candidates = select_candidates(direct)
        ids = [c.station.id for c in candidates]

        assert len(candidates) == 3
        assert len(set(ids)) == len(ids)

    def test_max_candidates_parameter(self) -> None:
        stops = _stops(*[f"S{i}" for i in range(8)])
        direct = journey([leg("BER", "MUC", at(10), at(14), stopovers=stops)])

        candidates = select_candidates(direct, max_candidates=1)

        assert [c.station.id for c in candidates] == ["S2"]
