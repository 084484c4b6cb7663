"""Configuration loader used by create_app() to augment the Flask app.config().

The YAML file holds a DEFAULT section and one section per environment, e.g. DEV, TEST, PROD. The environment
section is layered over DEFAULT. Environment variables are applied last and override anything read from YAML, so a
container only needs to export, for example, DB_HOST or JWT_SECRET.
"""
import logging
import os

import yaml

DEFAULT_SECTION = 'DEFAULT'


class ConfigLoader( dict ):
    """A dictionary of configuration values that knows how to update itself from YAML and the environment."""

    def update_from_yaml_file( self, file_path, app_config_env ):
        """Load the DEFAULT section and then the requested environment section.

        :param str file_path: Path to the YAML configuration file.
        :param str app_config_env: The configuration name, e.g. TEST.
        :return: The loader, for chaining.
        """

        with open( file_path, 'r' ) as yaml_file:
            sections = yaml.safe_load( yaml_file ) or {}

        self.update( sections.get( DEFAULT_SECTION ) or {} )
        if app_config_env != DEFAULT_SECTION:
            if app_config_env not in sections:
                logging.warning( 'Configuration section %s not found in %s.', app_config_env, file_path )
            self.update( sections.get( app_config_env ) or {} )
        return self

    def update_from_env_variables( self, app_config_env ):
        """Override known keys with environment variables.

        A variable tagged with the environment name wins over an untagged one, e.g. TEST_DB_HOST over DB_HOST.
        Values are cast to the type already held for the key.

        :param str app_config_env: The configuration name, e.g. TEST.
        :return: The loader, for chaining.
        """

        for key in list( self.keys() ):
            tagged_key = '{}_{}'.format( app_config_env, key )
            if tagged_key in os.environ:
                self[ key ] = cast_value( self[ key ], os.environ[ tagged_key ] )
            elif key in os.environ:
                self[ key ] = cast_value( self[ key ], os.environ[ key ] )
        return self


def cast_value( current_value, new_value ):
    """Cast an environment string to the type of the current configuration value."""

    if isinstance( current_value, bool ):
        return new_value.lower() in ( '1', 'true', 'yes', 'on' )
    if isinstance( current_value, int ):
        return int( new_value )
    if isinstance( current_value, float ):
        return float( new_value )
    return new_value
