"""
API REST para el colector de datos de turismo.

Este paquete expone endpoints HTTP que consultan la Tour API de data.go.kr,
recorren la paginación y guardan los resultados como JSON/CSV en output/.
"""

__version__ = "1.0.0"
