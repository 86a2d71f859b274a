"""
Signal-shape constants shared by the layout and the synthesizer.
"""

N_CHANNELS = 12        # channels per generated signal
POSITION_SCALE = 1024  # float position/orientation units → integer channel units
