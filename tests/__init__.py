"""
greenwindow test suite

- test_intervals.py — row parsing, fractions, DST edges
- test_window_classify.py — 7-day window, threshold, classification
- test_status.py — current status and green window
- test_calendar.py — day/night buckets and range labels
- test_presentation.py — chart series, table, display strings
- test_pipeline.py — end-to-end smoke runs and series validation
- test_weis_api.py — feed fetch failures (fail-loud)
- test_api_cli.py — HTTP route, CLI, env config
"""
