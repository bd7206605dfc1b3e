"""
The MODEL layer contains pure data structures and geometry.
It has NO knowledge of how the head is drawn or when it is re-evaluated.
It deals with Parameters, Landmarks, Guidelines, Transform and Projection.
"""
