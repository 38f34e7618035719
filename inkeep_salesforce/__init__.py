"""
Puente entre el widget de soporte de Inkeep y los Casos de Salesforce.

El punto de entrada HTTP vive en ``app.py``; este paquete contiene la
validación, el formateo, la caché del token y el envío del Caso.
"""

__version__ = "0.1.0"
