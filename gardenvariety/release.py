"""GardenVariety project related information"""
version = "0.4.0"
description = "Garden variety REST controller actions for WebOb applications"
long_description="""
GardenVariety provides reusable implementations of the seven conventional
REST controller actions (list, show, new_form, create, edit_form, update,
destroy) driven by a per-controller model concept.

Each action takes care of the repetitive parts of a CRUD controller:

 * authorization through pluggable policies
 * permitted attributes assignment
 * persistence through a model gateway
 * success/failure branching and redirects
 * localized flash messages with namespace aware lookup

Controllers select the actions they expose and can override any of them
while still reusing the generic behaviour.
"""
url="https://github.com/gardenvariety/gardenvariety"
author= "The GardenVariety contributors"
email = "gardenvariety@example.org"
copyright = """Copyright 2018-2026 The GardenVariety contributors"""
license = "MIT"
