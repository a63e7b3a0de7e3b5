"""
Date Sorter Utility

Утилита для раскладки файлов по папкам с датой (ДД-ММ-ГГГГ),
извлеченной из имени файла по позиционному шаблону.
"""

__version__ = "1.0.0"
__author__ = "File Migrator Team"
__description__ = "Utility for sorting files into dated folders by a filename template"
