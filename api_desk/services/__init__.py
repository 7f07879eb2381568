"""Application services layer (the command boundary).

Services bind the forwarder and the document store to named commands. They
hold no state of their own and stay free of any particular host or UI.
"""
