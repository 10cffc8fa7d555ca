"""
Core fixed-point primitives, codecs and contracts.

Модули ядра не зависят от внешних систем: целочисленная арифметика,
разбор/форматирование текста и декодирование внешних представлений.
"""
