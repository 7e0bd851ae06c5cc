"""Support modules for GardenVariety features.

Support modules implement components that are used by GardenVariety
to provide the user level API.
"""
