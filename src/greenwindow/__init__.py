"""
Clean energy window for the SPP WEIS load/solar/wind forecast feed.

Modules:
- config: pipeline configuration (.env aware)
- intervals: raw feed rows -> local-time interval records
- fractions: renewable fraction arithmetic
- window: 7-day horizon filter from local midnight
- classify: adaptive threshold + green classification
- status: current status and green window
- daily_calendar: per-day/per-night green hour ranges
- presentation: chart series and table shapes
- validation: hourly series integrity report
- weis_api: feed fetch collaborator
- tasks: pipeline orchestration
- api: FastAPI route
- cli: Typer CLI
"""
