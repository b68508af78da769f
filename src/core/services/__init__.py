"""Servicios de orquestación del Core."""
