"""
BuckTrax — movement-prediction analytics for trail-camera sightings.

Contains the core logic for turning tagged trail-camera photos into a
per-time-of-day probability map of where an animal is likely to be:
  - bucktrax.data.snapshot          — read-only property snapshot + CSV loader
  - bucktrax.data.sightings         — tagged photo → geolocated sighting join
  - bucktrax.terrain.classification — terrain feature taxonomy
  - bucktrax.terrain.geometry       — centroid extraction from geometry text
  - bucktrax.terrain.corridors      — movement-corridor zone selection
  - bucktrax.prediction.segments    — six fixed day-part time segments
  - bucktrax.prediction.zones       — per-segment location zones
  - bucktrax.prediction.confidence  — per-segment confidence score
  - bucktrax.prediction.routes      — movement routes between nearby cameras
  - bucktrax.prediction.assembler   — full prediction result
  - bucktrax.config                 — YAML config loading + settings
  - bucktrax.logging_utils          — project-wide logger factory
"""
