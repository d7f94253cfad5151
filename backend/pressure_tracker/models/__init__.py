from .measurement import Measurement, serialize_measurement
