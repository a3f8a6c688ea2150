"""Recruitment consultancy back office: feature permissions and recycle bin."""
