"""Утилиты amarTasks: приоритет, даты, валидация, логирование"""
