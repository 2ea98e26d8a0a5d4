import sys

def main():
    # 延迟导入，保持入口脚本轻量
    from ipapi.cli import main as cli_main
    return cli_main()

if __name__ == '__main__':
    sys.exit(main())
