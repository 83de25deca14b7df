"""
Default settings, overridable from the environment.
Select a profile with LABEL_ENGINE_ENV (production | development | testing).
"""

import os
import logging

basedir = os.path.abspath(os.path.dirname(__file__))


class Config(object):
    DEBUG = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', logging.WARNING)

    SERVER_PORT = int(os.getenv('SERVER_PORT', 8013))
    SERVER_HOST = os.getenv('SERVER_HOST', "0.0.0.0")

    PRINTER_NAME = os.getenv('PRINTER_NAME', "Dymo LabelWriter 450 Twin Turbo")
    LABEL_DEFAULT_NAME = os.getenv('LABEL_DEFAULT_NAME', "30346")
    LABEL_SOURCE = os.getenv('LABEL_SOURCE', "auto")

    FONT_FOLDER = os.getenv('FONT_FOLDER', "")

    # simulation | spool
    PRINT_SINK = os.getenv('PRINT_SINK', "simulation")
    PRINT_SPOOL_DIR = os.getenv('PRINT_SPOOL_DIR', os.path.join(basedir, "spool"))


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = logging.DEBUG


class TestingConfig(Config):
    TESTING = True
    PRINT_SINK = "simulation"


config_by_env = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': Config,
}


def get_config():
    return config_by_env.get(os.getenv('LABEL_ENGINE_ENV', 'production'), Config)
