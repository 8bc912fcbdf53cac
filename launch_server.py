"""Launch the trackboard server on the generated sample tracks."""

import logging

import trackboard as tb
from trackboard.server import serve

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

store = tb.InMemoryAnnotationStore.from_json_lines("data/tracks.jsonl")
print(f"Annotation store: {len(store)} tracks")
print("Launching server...")

serve(store, tb.Settings.from_env())
