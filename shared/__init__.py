"""Общие модели и исключения клиента и сервера amarTasks"""
