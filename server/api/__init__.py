"""Маршруты API"""
