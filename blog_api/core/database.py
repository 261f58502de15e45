# blog_api/core/database.py
import logging
from flask import Flask
from pymongo import DESCENDING, MongoClient
from pymongo.database import Database


def init_db(app: Flask, db: Database = None) -> Database:
    """
    Returns the database the services use and makes sure its indexes exist.

    :param app: Flask application
    :param db: an already constructed database (tests); a MongoClient on MONGO_URI otherwise
    """
    if db is None:
        client = MongoClient(app.config['MONGO_URI'])
        db = client[app.config['MONGO_DB_NAME']]
        logging.info(f"MongoDB connected (database: {app.config['MONGO_DB_NAME']})")

    # Post listings are always sorted newest first
    db['posts'].create_index([('created_at', DESCENDING), ('_id', DESCENDING)])
    return db
