"""Generate synthetic annotation tracks for the trackboard server.

Produces two files next to this script:
- tracks.jsonl          one store document per track (id, subseq,
                        exon_boundaries, gaps, length, genetree)
- example_request.json  a /board request drawing every track over 1000-2000

Tracks are grouped into gene trees. Gaps are evenly spaced blocks with
alternating "low"/"high" kinds; exon boundaries fall between them.

No trackboard dependency, only numpy + pandas.
"""

import json

import numpy as np
import pandas as pd
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

SEED = 42
N_TREES = 3
TRACKS_PER_TREE = 4
SEQ_LENGTH = 5000
N_GAPS = 12
GAP_SPAN = 120
TRACK_HEIGHT = 40
OUT_DIR = Path(__file__).parent

BASES = np.array(list("ACGT"))


def make_track(rng: np.random.Generator, name: str, tree: str) -> dict:
    seq = "".join(rng.choice(BASES, SEQ_LENGTH))
    sep = SEQ_LENGTH // (N_GAPS + 1)
    jitter = rng.integers(-sep // 4, sep // 4, N_GAPS)
    starts = (np.arange(1, N_GAPS + 1) * sep + jitter).clip(0, SEQ_LENGTH - GAP_SPAN)
    gaps = [
        {"start": int(s), "end": int(s + GAP_SPAN), "type": "low" if i % 2 == 0 else "high"}
        for i, s in enumerate(starts)
    ]
    boundaries = sorted(int(s + GAP_SPAN + sep // 3) for s in starts[:-1])
    return {
        "id": name,
        "genetree": tree,
        "subseq": seq,
        "length": SEQ_LENGTH,
        "exon_boundaries": boundaries,
        "gaps": gaps,
    }


def main():
    rng = np.random.default_rng(SEED)
    docs = []
    for t in range(N_TREES):
        tree = f"GT{t:04d}"
        for k in range(TRACKS_PER_TREE):
            docs.append(make_track(rng, f"track_{t * TRACKS_PER_TREE + k}", tree))

    frame = pd.DataFrame(docs)
    frame.to_json(OUT_DIR / "tracks.jsonl", orient="records", lines=True)

    colors = [{"r": 40, "g": 40, "b": 40}, {"r": 90, "g": 90, "b": 160}]
    request = {
        "loc": {"from": 1000, "to": 2000},
        "conf": {"width": 1000, "height": TRACK_HEIGHT * len(docs),
                 "bgColor": {"r": 255, "g": 255, "b": 255}},
        "tracks": [
            {"name": d["id"], "height": TRACK_HEIGHT, "v_offset": i * TRACK_HEIGHT,
             "fgColor": colors[i % 2]}
            for i, d in enumerate(docs)
        ],
    }
    (OUT_DIR / "example_request.json").write_text(json.dumps(request, indent=2))

    print(f"Wrote {len(docs)} tracks in {N_TREES} gene trees to {OUT_DIR / 'tracks.jsonl'}")
    print(frame.groupby("genetree")["id"].count().to_string())


if __name__ == "__main__":
    main()
