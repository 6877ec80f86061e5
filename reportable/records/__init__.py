from reportable.records.sql import SQLSource, TableRecord, TableRelationship
