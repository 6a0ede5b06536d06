# timeline/merger.py
import heapq, logging
from typing import Iterable, Iterator, Optional, Sequence, Tuple
from notes.model import Event

NON_NOTE_RANK = -1  # below every MIDI pitch, so tempo/meta events come first at a tick

def order_key(event: Event) -> Tuple[int, int]:
    """(tick, rank): lower notes first at the same tick, so chords fan upwards."""
    rank = event.pitch if event.is_note else NON_NOTE_RANK
    return (event.tick_time, rank)

def compare_events(a: Event, b: Event) -> int:
    ka, kb = order_key(a), order_key(b)
    return (ka > kb) - (ka < kb)

class TrackMerger:
    """Lazy k-way merge of per-track event sequences.

    Each track keeps its own cursor; the heap only ever holds the current
    head of every live cursor, keyed by (order_key, track slot). Equal keys
    resolve to the lower slot.
    """
    def __init__(self, tracks: Iterable[Optional[Sequence[Event]]] = ()):
        self._cursors: list[Iterator[Event]] = []
        for t in tracks:
            self.add(t)

    def add(self, track: Optional[Iterable[Event]]):
        if track is None:
            logging.debug("TrackMerger: skipping missing track")
            return
        self._cursors.append(iter(track))

    def __len__(self) -> int:
        return len(self._cursors)

    def __iter__(self) -> Iterator[Event]:
        heap: list[tuple[Tuple[int, int], int, Event]] = []
        for slot, cur in enumerate(self._cursors):
            head = next(cur, None)
            if head is not None:
                heap.append((order_key(head), slot, head))
        heapq.heapify(heap)

        while heap:
            _, slot, ev = heap[0]
            nxt = next(self._cursors[slot], None)
            if nxt is None:
                heapq.heappop(heap)
            else:
                heapq.heapreplace(heap, (order_key(nxt), slot, nxt))
            yield ev

def merge_tracks(tracks: Iterable[Optional[Sequence[Event]]]) -> Iterator[Event]:
    return iter(TrackMerger(tracks))
