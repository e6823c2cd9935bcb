"""Ядро клиента amarTasks: хранилище состояния"""
