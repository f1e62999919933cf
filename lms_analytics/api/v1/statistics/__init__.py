# -*- coding: utf-8 -*-
"""
Course statistics API.
"""
