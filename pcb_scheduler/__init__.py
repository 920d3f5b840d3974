"""
PCB Round-Robin Scheduler Simulator

Core modules:
- engine: tick rules, ready-queue dispatch and the completion check
- models: process records and their states
- ready_queue: FIFO of pids awaiting dispatch
- trace: helpers for producing the per-tick "Interrupt" trace (no behavior changes)
- events / event_sink: structured record of each scheduling decision
- stream_io: process-list ingestion and validation, event-stream export
- __main__: the `run` command-line harness
"""
