"""
The CONTROLLER layer wires the model functions into complete evaluations.
"""
