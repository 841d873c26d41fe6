import importlib.util
import sys
import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

_MISSING_PYDANTIC_SETTINGS = importlib.util.find_spec("pydantic_settings") is None

if not _MISSING_PYDANTIC_SETTINGS:
    from pydantic import ValidationError

    from weather_dain.infra.history_store import MemoryHistoryStore
    from weather_dain.schemas import HistoryEntry


def _entry(index: int, latitude: float = 0.0):
    return HistoryEntry(
        timestamp=1_700_000_000_000 + index,
        latitude=latitude,
        longitude=float(index),
        temperature=20.0 + index,
        wind_speed=float(index),
    )


@unittest.skipUnless(
    not _MISSING_PYDANTIC_SETTINGS, "pydantic_settings is not installed"
)
class HistoryStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryHistoryStore()

    def test_unknown_agent_reads_empty(self) -> None:
        self.assertEqual(self.store.all("nobody"), ())
        self.assertEqual(self.store.recent("nobody", 5), ())

    def test_all_preserves_append_order(self) -> None:
        entries = [_entry(i) for i in range(7)]
        for entry in entries:
            self.store.append("a1", entry)
        self.assertEqual(list(self.store.all("a1")), entries)

    def test_recent_returns_chronological_suffix(self) -> None:
        entries = [_entry(i) for i in range(8)]
        for entry in entries:
            self.store.append("a1", entry)
        self.assertEqual(list(self.store.recent("a1", 5)), entries[-5:])

    def test_recent_with_large_n_equals_all(self) -> None:
        for i in range(3):
            self.store.append("a1", _entry(i))
        self.assertEqual(self.store.recent("a1", 3), self.store.all("a1"))
        self.assertEqual(self.store.recent("a1", 50), self.store.all("a1"))

    def test_recent_with_non_positive_n_is_empty(self) -> None:
        self.store.append("a1", _entry(0))
        self.assertEqual(self.store.recent("a1", 0), ())
        self.assertEqual(self.store.recent("a1", -2), ())

    def test_agents_are_isolated(self) -> None:
        self.store.append("b1", _entry(0))
        before = self.store.all("b1")
        self.store.append("a1", _entry(1))
        self.store.append("a1", _entry(2))
        self.assertEqual(self.store.all("b1"), before)
        self.assertEqual(len(self.store.all("a1")), 2)

    def test_snapshot_is_not_affected_by_later_appends(self) -> None:
        self.store.append("a1", _entry(0))
        snapshot = self.store.all("a1")
        self.store.append("a1", _entry(1))
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(len(self.store.all("a1")), 2)

    def test_entries_are_immutable(self) -> None:
        self.store.append("a1", _entry(0))
        stored = self.store.all("a1")[0]
        with self.assertRaises(ValidationError):
            stored.temperature = 99.0

    def test_concurrent_appends_lose_nothing(self) -> None:
        writers = 8
        per_writer = 250

        def write(worker: int) -> None:
            agent_id = "shared" if worker % 2 == 0 else f"solo-{worker}"
            for i in range(per_writer):
                self.store.append(agent_id, _entry(i, latitude=float(worker)))

        with ThreadPoolExecutor(max_workers=writers) as pool:
            list(pool.map(write, range(writers)))

        shared = self.store.all("shared")
        self.assertEqual(len(shared), (writers // 2) * per_writer)
        for worker in range(0, writers, 2):
            sequence = [e.longitude for e in shared if e.latitude == float(worker)]
            self.assertEqual(sequence, [float(i) for i in range(per_writer)])
        for worker in range(1, writers, 2):
            self.assertEqual(len(self.store.all(f"solo-{worker}")), per_writer)

    def test_count_tracks_appends(self) -> None:
        self.assertEqual(self.store.count("a1"), 0)
        for i in range(4):
            self.store.append("a1", _entry(i))
        self.store.append("b1", _entry(9))
        self.assertEqual(self.store.count("a1"), 4)
        self.assertEqual(self.store.count("a1"), len(self.store.all("a1")))
        self.assertEqual(self.store.count("b1"), 1)

    def test_reads_during_appends_see_consistent_snapshots(self) -> None:
        writers = 4
        per_writer = 300
        readers = 4
        done = threading.Event()

        def key(entry):
            return (entry.latitude, entry.longitude)

        def write(worker: int) -> None:
            for i in range(per_writer):
                self.store.append("shared", _entry(i, latitude=float(worker)))

        def read(_: int):
            snapshots = []
            pairs = []
            while not done.is_set():
                recent = [key(e) for e in self.store.recent("shared", 5)]
                after = [key(e) for e in self.store.all("shared")]
                if len(snapshots) < 300:
                    snapshots.append(after)
                    pairs.append((recent, after))
            return snapshots, pairs

        with ThreadPoolExecutor(max_workers=writers + readers) as pool:
            reader_futures = [pool.submit(read, r) for r in range(readers)]
            list(pool.map(write, range(writers)))
            done.set()
            results = [future.result() for future in reader_futures]

        final = [key(e) for e in self.store.all("shared")]
        self.assertEqual(len(final), writers * per_writer)
        self.assertEqual(len(set(final)), len(final))
        for snapshots, pairs in results:
            for snapshot in snapshots:
                self.assertEqual(len(set(snapshot)), len(snapshot))
                self.assertEqual(snapshot, final[: len(snapshot)])
            for recent, after in pairs:
                if not recent:
                    continue
                start = final.index(recent[0])
                end = start + len(recent)
                self.assertEqual(final[start:end], recent)
                self.assertEqual(len(recent), min(5, end))
                self.assertLessEqual(end, len(after))

if __name__ == "__main__":
    unittest.main()
