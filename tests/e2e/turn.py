#!/usr/bin/env python3
"""Push-to-talk client for /ws/voice (manual end-to-end check).

Streams a WAV file as PCM16 mono @24k with realtime pacing, sends ``end_audio``
and reports the metadata, reply audio and latency of the resulting turn.
"""

from __future__ import annotations

import os
import sys
import json
import time
import asyncio
import argparse
from pathlib import Path

import numpy as np
import websockets
import soundfile as sf

if __package__ in {None, ""}:
    sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from voice_relay.config import WS_ENDPOINT_PATH, AUDIO_FRAME_BYTES, AUDIO_SAMPLE_RATE_HZ  # noqa: E402


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Push-to-talk client for the voice relay")
    p.add_argument("audio", type=Path, help="WAV/FLAC file to speak")
    p.add_argument("--server", default=(os.getenv("VOICE_RELAY_SERVER") or "localhost:3000").strip())
    p.add_argument("--secure", action="store_true")
    p.add_argument("--out", type=Path, default=None, help="Write the reply audio to this WAV file")
    p.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for end_response")
    return p.parse_args()


def build_ws_url(server: str, *, secure: bool) -> str:
    s = server.strip().rstrip("/")
    if not (s.startswith("ws://") or s.startswith("wss://")):
        s = f"{'wss' if secure else 'ws'}://{s}"
    return f"{s}{WS_ENDPOINT_PATH}"


def load_pcm16(path: Path) -> bytes:
    data, sr = sf.read(str(path), dtype="float32", always_2d=True)
    mono = data.mean(axis=1)
    if sr != AUDIO_SAMPLE_RATE_HZ:
        # Linear resample is enough for a smoke test.
        n_out = int(round(len(mono) * AUDIO_SAMPLE_RATE_HZ / sr))
        mono = np.interp(np.linspace(0, len(mono) - 1, n_out), np.arange(len(mono)), mono)
    return (np.clip(mono, -1.0, 1.0) * 32767.0).astype("<i2").tobytes()


async def stream_audio(ws, pcm: bytes) -> None:
    frame_s = AUDIO_FRAME_BYTES / (AUDIO_SAMPLE_RATE_HZ * 2)
    start = time.perf_counter()
    for i in range(0, len(pcm), AUDIO_FRAME_BYTES):
        await ws.send(pcm[i : i + AUDIO_FRAME_BYTES])
        target = start + (i // AUDIO_FRAME_BYTES + 1) * frame_s
        delay = target - time.perf_counter()
        if delay > 0:
            await asyncio.sleep(delay)


async def run_turn(args: argparse.Namespace) -> int:
    pcm = load_pcm16(args.audio)
    url = build_ws_url(args.server, secure=args.secure)
    print(f"Connecting to {url}; streaming {len(pcm) / (AUDIO_SAMPLE_RATE_HZ * 2):.2f}s of audio")

    reply = bytearray()
    async with websockets.connect(url, max_size=None) as ws:
        await stream_audio(ws, pcm)
        await ws.send(json.dumps({"type": "end_audio"}))
        sent_end = time.perf_counter()
        first_audio: float | None = None

        while True:
            try:
                raw = await asyncio.wait_for(ws.recv(), timeout=args.timeout)
            except TimeoutError:
                print("Timed out waiting for end_response")
                return 1

            if isinstance(raw, bytes):
                if first_audio is None:
                    first_audio = time.perf_counter()
                reply.extend(raw)
                continue

            msg = json.loads(raw)
            if msg.get("type") == "metadata":
                print(f"metadata: you said {msg.get('transcript')!r}, reply {msg.get('response_text')!r}")
            elif msg.get("type") == "error":
                print(f"error: {msg.get('message')}")
            elif msg.get("type") == "end_response":
                break

    total_ms = (time.perf_counter() - sent_end) * 1000
    ttfa = f"{(first_audio - sent_end) * 1000:.0f}ms" if first_audio is not None else "n/a"
    print(f"Reply: {len(reply) / (AUDIO_SAMPLE_RATE_HZ * 2):.2f}s audio, first audio {ttfa}, total {total_ms:.0f}ms")

    if args.out is not None and reply:
        samples = np.frombuffer(bytes(reply), dtype="<i2")
        sf.write(str(args.out), samples, AUDIO_SAMPLE_RATE_HZ, subtype="PCM_16")
        print(f"Wrote {args.out}")
    return 0


def main() -> None:
    sys.exit(asyncio.run(run_turn(parse_args())))


if __name__ == "__main__":
    main()
