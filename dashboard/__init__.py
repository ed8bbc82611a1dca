"""Dashboard application for the hospital administration backend.

This package contains the canonical records, entity stores, aggregation
functions and HTTP views behind the staff dashboard (patients,
appointments, department queues and bed occupancy).
"""
