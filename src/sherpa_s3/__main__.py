from sherpa_s3.cli import main

if __name__ == "__main__":
    main()
