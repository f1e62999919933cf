# -*- coding: utf-8 -*-
"""
Student dashboard API.
"""
