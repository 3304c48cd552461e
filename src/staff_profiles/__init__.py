"""Staff profiles package.

Data access for employee profile records (``user_infos``) of the store
administration app, organized by feature modules with a thin service layer
on top of SQLAlchemy repositories.
"""
