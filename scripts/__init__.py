"""Скрипты запуска amarTasks"""
