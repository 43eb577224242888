"""ccgen.core package

Header data model, literal formatting and the persisted form.
"""
