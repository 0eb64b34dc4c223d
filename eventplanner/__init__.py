"""
eventplanner package

Contains the spreadsheet-backed event planning helpers:
- Reconcile intake-form contacts into the shared People roster
- Map registration / volunteer / speaker form responses to contacts
- Read and seed the Config tab (option lists, form links, event info)
- Build the printable cue sheet from the Cue Builder tab
"""
