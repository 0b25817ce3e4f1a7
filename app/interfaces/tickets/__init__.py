"""Tickets bounded context — HTTP interface."""
