from .api import TimeEntriesAPI, fetch_time_entries
