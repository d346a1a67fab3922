"""Wrapper entry point for spark-submit.

Usage:
    spark-submit \\
        --master yarn \\
        --deploy-mode client \\
        --archives acidkeeper_env.tar.gz#acidkeeper_env \\
        --conf spark.pyspark.python=./acidkeeper_env/bin/python \\
        run_acidkeeper.py compact --table mydb.events --partition ds=2024-01-01 --type major --wait
"""

from acidkeeper.cli import main

if __name__ == "__main__":
    main()
